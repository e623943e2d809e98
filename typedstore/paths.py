"""Path resolution over nested values and over descriptors.

A path is a list of keys: strings index mappings, integers (or digit-only
strings) index lists. String paths are split on a separator, ``"."`` by
default, and the empty string means the whole value.

Writes never mutate the value they are given. ``set_path`` copies every
container on the way down to the target and shares everything else, so
references to the previous value (a cached default, a value handed out by
``get``) keep seeing the old data.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from .exceptions import PathResolutionError
from .schema.base import MISSING, Key, Kind, Path, TypeDescriptor

DEFAULT_SEPARATOR = "."

PathLike = Union[None, str, int, Sequence[Key]]


def split_path(path: str, separator: str = DEFAULT_SEPARATOR) -> Path:
    """Split a string path into keys. ``""`` is the root path."""
    if not separator:
        raise ValueError("Path separator must be a non-empty string")
    if path == "":
        return []
    return path.split(separator)


def join_path(path: Sequence[Key], separator: str = DEFAULT_SEPARATOR) -> str:
    """Inverse of ``split_path`` for keys that do not contain ``separator``."""
    if not separator:
        raise ValueError("Path separator must be a non-empty string")
    return separator.join(str(key) for key in path)


def normalize_path(path: PathLike, separator: str = DEFAULT_SEPARATOR) -> Path:
    """Turn any accepted path form into a list of keys."""
    if path is None:
        return []
    if isinstance(path, str):
        return split_path(path, separator)
    if isinstance(path, int) and not isinstance(path, bool):
        return [path]
    if isinstance(path, (list, tuple)):
        for key in path:
            if isinstance(key, bool) or not isinstance(key, (str, int)):
                raise TypeError(f"Path keys must be str or int, got {key!r}")
        return list(path)
    raise TypeError(f"Unsupported path type: {type(path).__name__}")


def _list_index(key: Key) -> Optional[int]:
    if isinstance(key, int):
        return key if key >= 0 else None
    # isdigit() also accepts characters such as "²" that int() rejects
    if key.isascii() and key.isdigit():
        return int(key)
    return None


def _child(node: Any, key: Key) -> Any:
    if isinstance(node, Mapping):
        return node.get(key, MISSING)
    if isinstance(node, (list, tuple)):
        index = _list_index(key)
        if index is not None and index < len(node):
            return node[index]
    return MISSING


def get_path(value: Any, path: Sequence[Key]) -> Any:
    """Return the subtree at ``path``, or ``MISSING`` if it does not exist."""
    node = value
    for key in path:
        node = _child(node, key)
        if node is MISSING:
            return MISSING
    return node


@dataclass(frozen=True)
class Literal:
    """Patch that replaces the target with ``value``."""

    value: Any

    def apply(self, previous: Any) -> Any:
        return self.value


@dataclass(frozen=True)
class Updater:
    """Patch that computes the new target from the previous one.

    ``fn`` receives ``MISSING`` when the target does not exist yet.
    """

    fn: Callable[[Any], Any]

    def apply(self, previous: Any) -> Any:
        return self.fn(previous)


Patch = Union[Literal, Updater]


def set_path(value: Any, path: Sequence[Key], patch: Patch) -> Any:
    """Return a copy of ``value`` with ``patch`` applied at ``path``.

    The last key may name a mapping field that does not exist yet, or the
    index one past the end of a list (appending). Every other key must
    already exist.

    Raises:
        PathResolutionError: If a parent along the path is missing or is not
            a container, or a list index is out of range
    """
    return _assign(value, list(path), 0, patch)


def _assign(node: Any, path: Path, depth: int, patch: Patch) -> Any:
    if depth == len(path):
        return patch.apply(node)

    key = path[depth]
    is_last = depth == len(path) - 1

    if isinstance(node, Mapping):
        updated = dict(node)
        child = _assign(node.get(key, MISSING), path, depth + 1, patch)
        if child is MISSING:
            updated.pop(key, None)
        else:
            updated[key] = child
        return updated

    if isinstance(node, (list, tuple)):
        index = _list_index(key)
        if index is None:
            raise PathResolutionError(path[: depth + 1], "not a list index")
        updated = list(node)
        if index < len(node):
            child = _assign(node[index], path, depth + 1, patch)
            if child is MISSING:
                raise PathResolutionError(path[: depth + 1], "cannot remove list item")
            updated[index] = child
        elif index == len(node) and is_last:
            child = patch.apply(MISSING)
            if child is not MISSING:
                updated.append(child)
        else:
            raise PathResolutionError(path[: depth + 1], "list index out of range")
        return updated

    raise PathResolutionError(path[:depth], "not a container")


def get_type_by_path(
    descriptor: TypeDescriptor, path: Sequence[Key]
) -> Optional[TypeDescriptor]:
    """Find the descriptor governing ``path``.

    Only dictionary fields can be addressed: lists and unions have no named
    children, so any path crossing one resolves to ``None``.
    """
    current = descriptor
    for key in path:
        if current.kind is not Kind.DICTIONARY or key not in current.types:
            return None
        current = current.types[key]
    return current
