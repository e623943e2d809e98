"""Outcomes of store operations before they reach the caller.

Operations build a ``Result``; ``Store`` then either returns ``True``,
hands the failure to the matching callback (and returns ``False``) or raises
it when no callback is configured.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from ..exceptions import ConflictError, InvalidValueError
from ..schema.base import MISSING, Path


@dataclass(frozen=True)
class Invalid:
    """The value failed validation at ``paths``."""

    paths: List[Path]

    def to_exception(self, name: Optional[str] = None) -> InvalidValueError:
        return InvalidValueError(self.paths, name=name)


@dataclass(frozen=True)
class Conflict:
    """Storage holds ``old_source`` where this store expected its baseline."""

    new_source: Optional[str]
    old_source: Optional[str]

    def to_exception(self, name: Optional[str] = None) -> ConflictError:
        return ConflictError(self.new_source, self.old_source, name=name)


Failure = Union[Invalid, Conflict]


@dataclass(frozen=True)
class Result:
    """Either a value or a failure."""

    value: Any = MISSING
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: Any = MISSING) -> "Result":
        return cls(value=value)

    @classmethod
    def invalid(cls, paths: List[Path]) -> "Result":
        return cls(failure=Invalid(paths))

    @classmethod
    def conflict(
        cls, new_source: Optional[str], old_source: Optional[str]
    ) -> "Result":
        return cls(failure=Conflict(new_source, old_source))
