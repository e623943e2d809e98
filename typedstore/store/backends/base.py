"""Abstract base class for storage backends."""

from abc import ABC, abstractmethod
from typing import Iterator, Optional


class StorageBackend(ABC):
    """A shared string-keyed, string-valued storage resource.

    Stores only need ``get_item`` and ``set_item``; several stores (or
    other programs) may read and write the same backend, so a store never
    assumes it owns a key.
    """

    def connect(self, **kwargs) -> None:
        """Establish connection to storage.

        Args:
            **kwargs: Backend-specific connection parameters
        """
        pass

    def close(self) -> None:
        """Close connection and release resources."""
        pass

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the string stored under key, or None if absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> bool:
        """Delete key.

        Returns:
            True if the key existed, False otherwise
        """
        pass

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Yield stored keys in sorted order."""
        pass

    def __enter__(self) -> "StorageBackend":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
