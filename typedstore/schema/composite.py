"""Composite descriptors: Dictionary, List and Union."""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from .base import (
    MISSING,
    DescriptorError,
    Kind,
    TypeDescriptor,
    ValidatingResult,
    ensure_descriptor,
)
from .scalars import AnyType


def is_sequence(value: Any) -> bool:
    """Whether ``value`` is an ordered sequence in the JSON sense."""
    return isinstance(value, (list, tuple))


class DictionaryType(TypeDescriptor):
    """A mapping whose declared fields each follow their own descriptor.

    Fields not listed in ``types`` are left unconstrained. An absent field is
    validated as ``MISSING``, so only descriptors accepting ``MISSING``
    (``NullableType``, ``AnyType``) make a field optional.

    Example:
        point = DictionaryType({"x": NumberType(), "y": NumberType()})
        point.validate({"x": "a", "y": None}).paths  # [["x"], ["y"]]
        point.default_value  # {"x": 0, "y": 0}
    """

    kind = Kind.DICTIONARY

    def __init__(
        self,
        types: Optional[Mapping] = None,
        default_value: Any = MISSING,
    ):
        if types is None:
            types = {}
        if not isinstance(types, Mapping):
            raise DescriptorError(
                f"DictionaryType types must be a mapping, got {type(types).__name__}"
            )
        self.types: Dict[str, TypeDescriptor] = {
            key: ensure_descriptor(child, f"field {key!r}")
            for key, child in types.items()
        }
        self._default_value = default_value
        self._check_default(default_value)

    def validate(self, value: Any) -> ValidatingResult:
        if not isinstance(value, Mapping):
            return ValidatingResult.fail()

        paths = []
        for key, child in self.types.items():
            result = child.validate(value.get(key, MISSING))
            if not result.valid:
                paths.extend(result.prefixed(key))

        if paths:
            return ValidatingResult.fail(paths)
        return ValidatingResult.ok()

    def _default(self) -> Any:
        if self._default_value is not MISSING:
            return self._default_value
        synthesized = {}
        for key, child in self.types.items():
            child_default = child.default_value
            if child_default is not MISSING:
                synthesized[key] = child_default
        return synthesized

    def repair(self, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return self.default_value

        repaired = dict(value)
        for key, child in self.types.items():
            current = value.get(key, MISSING)
            if child.validate(current).valid:
                continue
            fixed = child.repair(current)
            if fixed is MISSING:
                repaired.pop(key, None)
            else:
                repaired[key] = fixed
        return repaired

    def __repr__(self) -> str:
        return f"DictionaryType({self.types!r})"


class ListType(TypeDescriptor):
    """An ordered sequence whose elements share one descriptor."""

    kind = Kind.LIST

    def __init__(
        self,
        element: Optional[TypeDescriptor] = None,
        default_value: Any = MISSING,
    ):
        self.element = (
            AnyType() if element is None else ensure_descriptor(element, "element")
        )
        self._default_value = default_value
        self._check_default(default_value)

    def validate(self, value: Any) -> ValidatingResult:
        if not is_sequence(value):
            return ValidatingResult.fail()

        paths = []
        for index, item in enumerate(value):
            result = self.element.validate(item)
            if not result.valid:
                paths.extend(result.prefixed(index))

        if paths:
            return ValidatingResult.fail(paths)
        return ValidatingResult.ok()

    def _default(self) -> Any:
        if self._default_value is not MISSING:
            return self._default_value
        return []

    def repair(self, value: Any) -> Any:
        if not is_sequence(value):
            return self.default_value
        return [self.element.repair(item) for item in value]

    def __repr__(self) -> str:
        return f"ListType({self.element!r})"


class UnionType(TypeDescriptor):
    """Valid when any member is valid, tried in declared order.

    A value matching no member is reported as a failure of the whole value;
    near misses against individual members are not reported. Repair does not
    try to fix the value towards a member: it falls back to the union's own
    default.
    """

    kind = Kind.UNION

    def __init__(self, types: Sequence, default_value: Any = MISSING):
        if not isinstance(types, (list, tuple)):
            raise DescriptorError("UnionType types must be a sequence of descriptors")
        if not types:
            raise DescriptorError("UnionType needs at least one member")
        self.types: List[TypeDescriptor] = [
            ensure_descriptor(member, f"union member {i}")
            for i, member in enumerate(types)
        ]
        self._default_value = default_value
        self._check_default(default_value)

    def validate(self, value: Any) -> ValidatingResult:
        for member in self.types:
            if member.validate(value).valid:
                return ValidatingResult.ok()
        return ValidatingResult.fail()

    def _default(self) -> Any:
        if self._default_value is not MISSING:
            return self._default_value
        return self.types[0].default_value

    def __repr__(self) -> str:
        return f"UnionType({self.types!r})"
