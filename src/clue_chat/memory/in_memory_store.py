from typing import Dict, Optional

from clue_chat.memory.base import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Process-local store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
