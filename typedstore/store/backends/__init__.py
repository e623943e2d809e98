"""Storage backends for typedstore."""

from .base import StorageBackend
from .memory import MemoryBackend
from .sqlite import SQLiteBackend

__all__ = [
    "StorageBackend",
    "MemoryBackend",
    "SQLiteBackend",
]
