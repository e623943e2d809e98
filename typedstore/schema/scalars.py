"""Leaf descriptors: Any, Boolean, String, Number and Nullable."""

import math
import re
from typing import Any, Optional, Union

from .base import (
    MISSING,
    DescriptorError,
    Kind,
    TypeDescriptor,
    ValidatingResult,
)

INFINITY = math.inf


class AnyType(TypeDescriptor):
    """Accepts every value."""

    kind = Kind.ANY

    def __init__(self, default_value: Any = None):
        self._default_value = default_value

    def validate(self, value: Any) -> ValidatingResult:
        return ValidatingResult.ok()

    def _default(self) -> Any:
        return self._default_value


class BooleanType(TypeDescriptor):
    """Accepts ``True`` and ``False`` only (not 0/1)."""

    kind = Kind.BOOLEAN

    def __init__(self, default_value: bool = False):
        self._default_value = default_value
        self._check_default(default_value)

    def validate(self, value: Any) -> ValidatingResult:
        if isinstance(value, bool):
            return ValidatingResult.ok()
        return ValidatingResult.fail()

    def _default(self) -> Any:
        return self._default_value


class StringType(TypeDescriptor):
    """A string with optional length bounds and regular expression.

    The pattern is searched anywhere in the string; anchor it with ``^`` and
    ``$`` to match the whole value.

    Example:
        code = StringType(min_length=3, max_length=3, pattern=r"^[A-Z]+$")
        code.validate("USD").valid  # True
    """

    kind = Kind.STRING

    def __init__(
        self,
        default_value: Any = MISSING,
        min_length: int = 0,
        max_length: float = INFINITY,
        pattern: Optional[Union[str, re.Pattern]] = None,
    ):
        if min_length < 0:
            raise DescriptorError(f"min_length must be >= 0, got {min_length}")
        if max_length < min_length:
            raise DescriptorError(
                f"max_length ({max_length}) is smaller than min_length ({min_length})"
            )
        self.min_length = min_length
        self.max_length = max_length
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        # Only a caller-supplied default has to satisfy the constraints
        self._check_default(default_value)
        self._default_value = "" if default_value is MISSING else default_value

    def validate(self, value: Any) -> ValidatingResult:
        if not isinstance(value, str):
            return ValidatingResult.fail()
        if not self.min_length <= len(value) <= self.max_length:
            return ValidatingResult.fail()
        if self.pattern is not None and self.pattern.search(value) is None:
            return ValidatingResult.fail()
        return ValidatingResult.ok()

    def _default(self) -> Any:
        return self._default_value

    def __repr__(self) -> str:
        return (
            f"StringType(min_length={self.min_length}, "
            f"max_length={self.max_length}, pattern={self.pattern!r})"
        )


class NumberType(TypeDescriptor):
    """A finite int or float, optionally bounded and/or integral."""

    kind = Kind.NUMBER

    def __init__(
        self,
        default_value: Any = MISSING,
        minimum: float = -INFINITY,
        maximum: float = INFINITY,
        integer: bool = False,
    ):
        if maximum < minimum:
            raise DescriptorError(
                f"maximum ({maximum}) is smaller than minimum ({minimum})"
            )
        self.minimum = minimum
        self.maximum = maximum
        self.integer = integer
        self._check_default(default_value)
        self._default_value = 0 if default_value is MISSING else default_value

    def validate(self, value: Any) -> ValidatingResult:
        # bool is an int subclass but not a number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return ValidatingResult.fail()
        if isinstance(value, float) and not math.isfinite(value):
            return ValidatingResult.fail()
        if not self.minimum <= value <= self.maximum:
            return ValidatingResult.fail()
        if self.integer and isinstance(value, float) and not value.is_integer():
            return ValidatingResult.fail()
        return ValidatingResult.ok()

    def _default(self) -> Any:
        return self._default_value

    def __repr__(self) -> str:
        return (
            f"NumberType(minimum={self.minimum}, maximum={self.maximum}, "
            f"integer={self.integer})"
        )


class NullableType(TypeDescriptor):
    """Accepts ``None`` and/or ``MISSING`` (an absent field)."""

    kind = Kind.NULLABLE

    def __init__(self, accept_null: bool = True, accept_missing: bool = True):
        self.accept_null = accept_null
        self.accept_missing = accept_missing

    def validate(self, value: Any) -> ValidatingResult:
        if value is None and self.accept_null:
            return ValidatingResult.ok()
        if value is MISSING and self.accept_missing:
            return ValidatingResult.ok()
        return ValidatingResult.fail()

    def _default(self) -> Any:
        if self.accept_null or not self.accept_missing:
            return None
        return MISSING

    def __repr__(self) -> str:
        return (
            f"NullableType(accept_null={self.accept_null}, "
            f"accept_missing={self.accept_missing})"
        )
