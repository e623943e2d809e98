"""Exceptions for the typedstore package."""

from typing import List, Optional, Sequence, Union

Path = List[Union[str, int]]


class StoreError(Exception):
    """Base exception for all typedstore errors."""

    pass


class DescriptorError(StoreError, ValueError):
    """A type descriptor was configured with inconsistent options."""

    pass


class InvalidValueError(StoreError, ValueError):
    """A value failed validation and was not repaired."""

    def __init__(self, paths: Sequence[Path], name: Optional[str] = None):
        self.paths = [list(p) for p in paths]
        self.name = name
        where = f" for store {name!r}" if name else ""
        super().__init__(f"Invalid value{where} at paths: {self.paths}")


class ConflictError(StoreError):
    """Storage was changed by someone else since this store last saw it."""

    def __init__(
        self,
        new_source: Optional[str],
        old_source: Optional[str],
        name: Optional[str] = None,
    ):
        self.new_source = new_source
        self.old_source = old_source
        self.name = name
        where = f" {name!r}" if name else ""
        super().__init__(
            f"Storage key{where} was modified externally; refusing to overwrite"
        )


class PathResolutionError(StoreError, KeyError):
    """A path does not exist in the value being walked."""

    def __init__(self, path: Sequence[Union[str, int]], reason: str = ""):
        self.path = list(path)
        self.reason = reason
        message = f"Cannot resolve path {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class SerializationError(StoreError):
    """Failed to encode or decode a stored value."""

    pass
