"""Configuration for Store instances."""

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional

from ..paths import DEFAULT_SEPARATOR
from ..schema.base import Path

InvalidHandler = Callable[[List[Path]], Any]
ConflictHandler = Callable[[Optional[str], Optional[str]], Any]


@dataclass
class StoreOptions:
    """Behavior flags for a Store.

    Attributes:
        delay: Seconds to wait before writing; 0 writes synchronously and
            anything larger debounces repeated saves into one write
        lazy_load: Skip the initial load() in the constructor
        strict_load: Validate loaded sources against the store's type
        secure: Check for external modification before every write
        auto_fix: Replace invalid parts of a value with defaults instead of
            rejecting it
        path_separator: Separator used to split string paths
        on_invalid: Called with the failing paths instead of raising
            InvalidValueError
        on_conflict: Called with (new_source, old_source) instead of raising
            ConflictError
    """

    delay: float = 0
    lazy_load: bool = False
    strict_load: bool = True
    secure: bool = True
    auto_fix: bool = True
    path_separator: str = DEFAULT_SEPARATOR
    on_invalid: Optional[InvalidHandler] = None
    on_conflict: Optional[ConflictHandler] = None

    def __post_init__(self):
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")
        if not isinstance(self.path_separator, str) or not self.path_separator:
            raise ValueError("path_separator must be a non-empty string")
        for name in ("on_invalid", "on_conflict"):
            handler = getattr(self, name)
            if handler is not None and not callable(handler):
                raise TypeError(f"{name} must be callable")

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "StoreOptions":
        """Build options from keyword arguments, rejecting unknown names."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise TypeError(f"Unknown store options: {', '.join(unknown)}")
        return cls(**options)
