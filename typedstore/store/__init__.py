"""Typed, path-addressable values persisted in string-keyed storage.

Quick Start:
    from typedstore.store import Store, connect
    from typedstore.schema import dictionary, boolean, number

    storage = connect("sqlite:///prefs.db")

    prefs = Store(
        "prefs",
        storage,
        type=dictionary({
            "volume": number(minimum=0, maximum=100, default_value=50),
            "muted": boolean(),
        }),
    )

    prefs.set("volume", 80)
    prefs.update("muted", lambda muted: not muted)
    prefs.get("volume")  # 80

Supported backends:
    - memory://           In-memory storage (testing)
    - sqlite:///path.db   SQLite file storage
    - sqlite:///:memory:  SQLite in-memory

Key Classes:
    - Store: load/save/get/set/update/reset with validation and auto-fix
    - StoreOptions: behavior flags (delay, secure, auto_fix, ...)
    - connect(): Create a backend from a URL

Conflicts:
    - With secure=True (the default) every write first checks that storage
      still holds what this store last read or wrote
"""

from .core import Store, connect
from .backends import StorageBackend, MemoryBackend, SQLiteBackend
from .debounce import DebouncedWriter
from .options import StoreOptions
from .result import Conflict, Invalid, Result
from .serialization import Serializer

__all__ = [
    # Main API
    "Store",
    "StoreOptions",
    "connect",
    # Backends
    "StorageBackend",
    "MemoryBackend",
    "SQLiteBackend",
    # Internals exposed for extension
    "DebouncedWriter",
    "Serializer",
    "Result",
    "Invalid",
    "Conflict",
]
