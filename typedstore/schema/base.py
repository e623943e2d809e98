"""Base classes shared by all type descriptors."""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, List, Optional, Sequence, Union

from ..exceptions import DescriptorError

Key = Union[str, int]
Path = List[Key]


class _Missing:
    """Marker for an absent value (a field that is not there at all)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()


class Kind(Enum):
    """Tag identifying each descriptor variant."""

    ANY = auto()
    BOOLEAN = auto()
    STRING = auto()
    NUMBER = auto()
    NULLABLE = auto()
    DICTIONARY = auto()
    LIST = auto()
    UNION = auto()


@dataclass(frozen=True)
class ValidatingResult:
    """Outcome of validating a value against a descriptor.

    ``paths`` is only set for invalid results. A failure of the value as a
    whole is reported as an empty path: ``[[]]``.
    """

    valid: bool
    paths: Optional[List[Path]] = None

    @classmethod
    def ok(cls) -> "ValidatingResult":
        return _OK

    @classmethod
    def fail(cls, paths: Optional[Sequence[Path]] = None) -> "ValidatingResult":
        if paths is None:
            paths = [[]]
        return cls(valid=False, paths=[list(p) for p in paths])

    def prefixed(self, key: Key) -> List[Path]:
        """Failing paths with ``key`` prepended to each."""
        return [[key] + list(p) for p in (self.paths or [])]

    def __bool__(self) -> bool:
        return self.valid


_OK = ValidatingResult(valid=True)


class TypeDescriptor(ABC):
    """A structural validator paired with a default value.

    Subclasses implement ``validate`` and ``_default``; ``repair`` has a
    leaf behavior here that composite descriptors override.
    """

    kind: Kind

    @abstractmethod
    def validate(self, value: Any) -> ValidatingResult:
        """Check ``value`` against this descriptor."""
        pass

    @abstractmethod
    def _default(self) -> Any:
        pass

    @property
    def default_value(self) -> Any:
        """A fresh copy of the default, safe for the caller to mutate."""
        return copy.deepcopy(self._default())

    def is_valid(self, value: Any) -> bool:
        return self.validate(value).valid

    def repair(self, value: Any) -> Any:
        """Return ``value`` with invalid parts replaced by defaults.

        The result is not guaranteed to be valid (for instance when the
        default itself does not satisfy the descriptor); callers validate it
        again.
        """
        if self.validate(value).valid:
            return value
        return self.default_value

    def _check_default(self, value: Any) -> None:
        """Reject an explicit default that fails this descriptor."""
        if value is MISSING:
            return
        result = self.validate(value)
        if not result.valid:
            raise DescriptorError(
                f"{type(self).__name__} default {value!r} is invalid "
                f"at {result.paths}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def ensure_descriptor(obj: Any, where: str) -> TypeDescriptor:
    if not isinstance(obj, TypeDescriptor):
        raise DescriptorError(
            f"{where} must be a TypeDescriptor, got {type(obj).__name__}"
        )
    return obj
