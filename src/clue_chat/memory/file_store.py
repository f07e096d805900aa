# src/clue_chat/memory/file_store.py
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from clue_chat.config import settings
from clue_chat.memory.base import BaseKeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(BaseKeyValueStore):
    """
    Key/value store backed by a single JSON object on disk.
    Every `set` rewrites the whole file through a temporary file and an atomic rename.
    """

    def __init__(self, path: str = settings.storage_path):
        self.path = Path(path)
        self._data: Dict[str, str] = self._read()
        logger.info(f"Key/value store opened at path: {self.path} ({len(self._data)} keys)")

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read key/value store '{self.path}', starting empty: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Key/value store '{self.path}' does not hold a JSON object, starting empty.")
            return {}
        return {key: value for key, value in raw.items() if isinstance(value, str)}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        updated = {**self._data, key: value}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(updated, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write key '{key}' to '{self.path}': {e}", exc_info=True)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        self._data = updated
        logger.debug(f"Stored key '{key}' ({len(value)} chars) in {self.path}")
