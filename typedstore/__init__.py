"""
typedstore - Typed values persisted in string-keyed storage.

Submodules:
    typedstore.schema - Structural type descriptors and type inference
    typedstore.paths - Path resolution over values and descriptors
    typedstore.store - The Store engine and storage backends
"""

from .exceptions import (
    StoreError,
    DescriptorError,
    InvalidValueError,
    ConflictError,
    PathResolutionError,
    SerializationError,
)
from .paths import Literal, Updater, join_path, split_path
from .schema import MISSING, ValidatingResult, infer_type
from .store import (
    Store,
    StoreOptions,
    connect,
    StorageBackend,
    MemoryBackend,
    SQLiteBackend,
)
from . import schema

__all__ = [
    # Store
    "Store",
    "StoreOptions",
    "connect",
    # Backends
    "StorageBackend",
    "MemoryBackend",
    "SQLiteBackend",
    # Types
    "schema",
    "infer_type",
    "ValidatingResult",
    "MISSING",
    # Paths
    "Literal",
    "Updater",
    "split_path",
    "join_path",
    # Exceptions
    "StoreError",
    "DescriptorError",
    "InvalidValueError",
    "ConflictError",
    "PathResolutionError",
    "SerializationError",
]

__version__ = "0.1.0"
