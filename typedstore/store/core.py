"""Core Store class: a typed value persisted under one storage key."""

import copy
import logging
import threading
from typing import Any, Callable, List, Optional, Tuple
from urllib.parse import urlparse

from ..exceptions import PathResolutionError, SerializationError
from ..paths import Literal, PathLike, Updater, get_path, get_type_by_path
from ..paths import normalize_path, set_path
from ..schema import AnyType, TypeDescriptor, infer_type
from ..schema.base import MISSING, Path, ensure_descriptor
from .backends.base import StorageBackend
from .backends.memory import MemoryBackend
from .debounce import DebouncedWriter, TimerFactory
from .options import StoreOptions
from .result import Conflict, Invalid, Result
from .serialization import Serializer

logger = logging.getLogger(__name__)


class Store:
    """A typed, path-addressable value persisted under ``name`` in ``storage``.

    The value is validated against ``type`` whenever it is loaded or changed.
    Invalid data is repaired with defaults (``auto_fix``), reported to
    ``on_invalid`` or raised as InvalidValueError. Before each write the
    store checks that nobody else changed the stored string since it last
    read or wrote it (``secure``); a divergence goes to ``on_conflict`` or
    is raised as ConflictError.

    With ``delay`` set, writes happen on a timer thread, and a conflict
    found when the timer fires is reported to ``on_conflict`` from that
    thread. A successful load() discards any write still waiting.

    Example:
        from typedstore import Store, MemoryBackend
        from typedstore.schema import dictionary, number, string

        storage = MemoryBackend()
        settings = Store(
            "settings",
            storage,
            type=dictionary({"theme": string(default_value="light"),
                             "font": dictionary({"size": number(default_value=12)})}),
        )

        settings.get("font.size")        # 12
        settings.set("font.size", 14)    # True, written to storage
        settings.set("font.size", "big") # InvalidValueError unless auto_fix
        settings.reset("font")           # back to {"size": 12}
    """

    def __init__(
        self,
        name: str,
        storage: StorageBackend,
        default_value: Any = MISSING,
        type: Optional[TypeDescriptor] = None,
        serializer: Optional[Serializer] = None,
        timer_factory: Optional[TimerFactory] = None,
        **options: Any,
    ):
        """Create a Store and, unless ``lazy_load`` is set, load it.

        Args:
            name: Key of this store's source string in storage
            storage: Shared storage backend (anything with get_item/set_item)
            default_value: Value used when storage holds nothing; also the
                source of the type when ``type`` is omitted
            type: Descriptor the value must satisfy; inferred from
                ``default_value`` when omitted, AnyType when both are omitted
            serializer: Codec for the source string (JSON by default)
            timer_factory: Timer constructor for delayed writes
            **options: StoreOptions fields (delay, lazy_load, strict_load,
                secure, auto_fix, path_separator, on_invalid, on_conflict)

        Raises:
            TypeError: On unknown options or an unusable storage object
            ValueError: On an empty name or invalid option values
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Store name must be a non-empty string")
        if not (hasattr(storage, "get_item") and hasattr(storage, "set_item")):
            raise TypeError("storage must provide get_item() and set_item()")

        self.name = name
        self.options = StoreOptions.from_dict(options)
        self._storage = storage
        self._serializer = serializer or Serializer()

        if type is None:
            type = AnyType() if default_value is MISSING else infer_type(default_value)
        self.type = ensure_descriptor(type, "type")

        if default_value is MISSING:
            default_value = self.type.default_value
        self._default = copy.deepcopy(default_value)

        self._value = copy.deepcopy(self._default)
        self._baseline: Optional[str] = None
        # Guards _value and _baseline against the delayed-write thread
        self._lock = threading.RLock()

        self._writer: Optional[DebouncedWriter] = None
        if self.options.delay > 0:
            self._writer = DebouncedWriter(
                self.options.delay, self._deliver, timer_factory
            )

        if not self.options.lazy_load:
            self.load()

    # Properties

    @property
    def value(self) -> Any:
        """The whole in-memory value. Treat it as read-only; use set()."""
        return self._value

    @property
    def default_value(self) -> Any:
        """A copy of the store's default value."""
        return copy.deepcopy(self._default)

    @property
    def baseline(self) -> Optional[str]:
        """The last source string this store read from or wrote to storage."""
        return self._baseline

    @property
    def pending(self) -> bool:
        """Whether a delayed write is waiting."""
        return self._writer is not None and self._writer.pending

    # Loading

    def load(self, source: Any = MISSING) -> bool:
        """Replace the in-memory value with a source string.

        Args:
            source: Serialized value; read from storage when omitted. None
                (nothing stored) adopts the default value without validation.

        Returns:
            True on success, False if on_invalid handled a failure

        Raises:
            InvalidValueError: If the source is invalid, cannot be repaired
                and no on_invalid handler is configured
        """
        with self._lock:
            if source is MISSING:
                source = self._storage.get_item(self.name)

            result = self._parse(source)
            if result.ok:
                self._value = result.value
                self._baseline = source
                # The pending payload was built from the value just replaced
                if self._writer is not None and self._writer.cancel():
                    logger.debug(
                        "Store %r: pending write discarded by load", self.name
                    )

        if not result.ok:
            return self._settle(result)
        logger.debug(
            "Loaded store %r from %s",
            self.name,
            "defaults" if source is None else "storage",
        )
        return True

    def _parse(self, source: Optional[str]) -> Result:
        if source is None:
            return Result.success(copy.deepcopy(self._default))

        try:
            value = self._serializer.loads(source)
        except SerializationError as e:
            logger.warning("Store %r holds unreadable data: %s", self.name, e)
            return self._fix(MISSING, [[]])

        if not self.options.strict_load:
            return Result.success(value)
        return self._conform(value)

    def _conform(self, value: Any) -> Result:
        """Validate ``value``, repairing it when auto_fix is enabled."""
        checked = self.type.validate(value)
        if checked.valid:
            return Result.success(value)
        return self._fix(value, checked.paths)

    def _fix(self, value: Any, paths: List[Path]) -> Result:
        if self.options.auto_fix:
            # Nothing usable at all: start over from the default
            fixed = self.default_value if value is MISSING else self.type.repair(value)
            if self.type.validate(fixed).valid:
                logger.warning(
                    "Store %r: replaced invalid data at %s with defaults",
                    self.name,
                    paths,
                )
                return Result.success(fixed)
            logger.debug("Store %r: auto-fix could not repair %s", self.name, paths)

        return Result.invalid(paths)

    # Saving

    def save(self, force: bool = False) -> bool:
        """Persist the current value.

        With ``delay`` set, the write is deferred and coalesced with later
        saves; otherwise it happens before save() returns.

        Args:
            force: Skip the conflict check and overwrite whatever is stored

        Returns:
            True if written (or scheduled), False if on_conflict handled a
            conflict

        Raises:
            ConflictError: If storage changed externally, secure is on and no
                on_conflict handler is configured
            SerializationError: If the value cannot be serialized
        """
        with self._lock:
            source = self._serializer.dumps(self._value)
            baseline = self._baseline

            conflict = False
            if self.options.secure and not force:
                stored = self._storage.get_item(self.name)
                conflict = stored != baseline

            if not conflict:
                if self._writer is not None:
                    self._writer.schedule((source, force, baseline))
                else:
                    self._write(source)
                return True

        logger.debug("Store %r: conflict detected on save", self.name)
        return self._settle(Result.conflict(source, stored))

    def check_conflict(self) -> bool:
        """Whether storage changed since this store last read or wrote it."""
        return self._storage.get_item(self.name) != self._baseline

    def _write(self, source: str) -> None:
        self._storage.set_item(self.name, source)
        self._baseline = source
        logger.debug("Wrote store %r (%d chars)", self.name, len(source))

    def _deliver(self, payload: Tuple[str, bool, Optional[str]]) -> None:
        """Perform a delayed write, checking for conflicts again first.

        ``baseline`` is the stored string the payload was built against.
        """
        source, force, baseline = payload
        with self._lock:
            if baseline != self._baseline:
                logger.debug(
                    "Store %r: delayed write superseded by a load", self.name
                )
                return

            stored = self._storage.get_item(self.name)
            if force or not self.options.secure or stored == baseline:
                self._write(source)
                return

        if self.options.on_conflict is not None:
            self.options.on_conflict(source, stored)
        else:
            logger.warning(
                "Store %r was modified externally; delayed write dropped",
                self.name,
            )

    def flush(self) -> bool:
        """Perform a pending delayed write now.

        Returns:
            True if a write was pending
        """
        return self._writer is not None and self._writer.flush()

    def cancel(self) -> bool:
        """Discard a pending delayed write.

        Returns:
            True if a write was pending
        """
        return self._writer is not None and self._writer.cancel()

    # Access

    def get(self, path: PathLike = None, default: Any = None) -> Any:
        """Return the value at ``path``, or ``default`` if it does not exist.

        Args:
            path: Key list or separator-joined string; None or "" for the
                whole value
            default: Returned when the path cannot be resolved
        """
        keys = normalize_path(path, self.options.path_separator)
        found = get_path(self._value, keys)
        return default if found is MISSING else found

    def set(self, path: PathLike, patch: Any) -> bool:
        """Change the value at ``path`` and save.

        Args:
            path: Where to apply the patch
            patch: New value, or an Updater computing it from the old one

        Returns:
            False if the path does not exist or on_invalid handled a failure;
            otherwise the result of save()

        Raises:
            InvalidValueError: If the new value is invalid, cannot be repaired
                and no on_invalid handler is configured
        """
        keys = normalize_path(path, self.options.path_separator)
        if not isinstance(patch, (Literal, Updater)):
            patch = Literal(patch)

        with self._lock:
            try:
                candidate = set_path(self._value, keys, patch)
            except PathResolutionError as e:
                logger.debug("Store %r: %s", self.name, e)
                return False

            # A store always holds a value; MISSING cannot be serialized
            if candidate is MISSING:
                logger.debug("Store %r: refusing to remove the root value", self.name)
                return False

            result = self._conform(candidate)
            if result.ok:
                self._value = result.value

        if not result.ok:
            return self._settle(result)
        return self.save()

    def update(self, path: PathLike, fn: Callable[[Any], Any]) -> bool:
        """Shortcut for ``set(path, Updater(fn))``."""
        return self.set(path, Updater(fn))

    def reset(self, path: PathLike = None) -> bool:
        """Restore the default value at ``path``.

        The default comes from the store's default value, or from the
        descriptor declared for that path when the default value has no such
        entry.

        Returns:
            False without changing anything when no default can be found;
            otherwise the result of set()
        """
        keys = normalize_path(path, self.options.path_separator)
        default = get_path(self._default, keys)
        if default is MISSING:
            descriptor = get_type_by_path(self.type, keys)
            if descriptor is None:
                return False
            default = descriptor.default_value
        else:
            default = copy.deepcopy(default)
        return self.set(keys, Literal(default))

    # Failure routing

    def _settle(self, result: Result) -> bool:
        """Hand a failure to its callback (returning False) or raise it."""
        failure = result.failure
        if failure is None:
            return True

        if isinstance(failure, Invalid):
            handler = self.options.on_invalid
            if handler is None:
                raise failure.to_exception(self.name)
            handler(failure.paths)
        elif isinstance(failure, Conflict):
            handler = self.options.on_conflict
            if handler is None:
                raise failure.to_exception(self.name)
            handler(failure.new_source, failure.old_source)
        return False

    # Lifecycle

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Flush any pending delayed write."""
        self.flush()

    def __repr__(self) -> str:
        return f"Store(name={self.name!r}, type={self.type!r})"


def connect(url: str) -> StorageBackend:
    """Open a storage backend from a URL.

    Supported URL schemes:
        - memory://          In-memory storage (testing)
        - sqlite:///path.db  SQLite file storage
        - sqlite:///:memory: SQLite in-memory

    Args:
        url: Connection URL

    Returns:
        Connected backend, ready to pass to Store

    Example:
        storage = connect("sqlite:///settings.db")
        prefs = Store("prefs", storage, default_value={"theme": "light"})
    """
    parsed = urlparse(url)
    scheme = parsed.scheme

    if scheme == "memory":
        backend = MemoryBackend()
        backend.connect()
        return backend

    elif scheme == "sqlite":
        from .backends.sqlite import SQLiteBackend

        # Handle sqlite:///path and sqlite:///:memory:
        path = parsed.path
        if path.startswith("/"):
            path = path[1:]  # Remove leading slash from file path

        backend = SQLiteBackend()
        backend.connect(path=path if path else ":memory:")
        return backend

    else:
        raise ValueError(f"Unknown storage scheme: {scheme}")
