from typing import Optional, Protocol


class BaseKeyValueStore(Protocol):
    """Durable string key/value storage used for chat history and bookmarks."""

    def get(self, key: str) -> Optional[str]:
        """Returns the stored value, or None when the key was never set.

        Args:
            key: The storage key.
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Replaces the value stored under `key` in full.

        Args:
            key: The storage key.
            value: The new value (typically a JSON document).
        """
        ...
