"""In-memory storage backend for testing."""

from typing import Dict, Iterator, Optional

from .base import StorageBackend


class MemoryBackend(StorageBackend):
    """In-memory storage backend.

    Useful for testing and temporary storage. Data is lost when the
    backend is closed or the process ends.

    Example:
        backend = MemoryBackend()
        backend.set_item("settings", '{"theme":"dark"}')
        backend.get_item("settings")  # '{"theme":"dark"}'
    """

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(data or {})

    def close(self) -> None:
        """Clear the in-memory store."""
        self._data.clear()

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be str, got {type(value).__name__}")
        self._data[key] = value

    def remove_item(self, key: str) -> bool:
        if key in self._data:
            del self._data[key]
            return True
        return False

    def keys(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __len__(self) -> int:
        return len(self._data)
