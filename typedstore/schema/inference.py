"""Derive a descriptor from an example value."""

from collections.abc import Mapping
from typing import Any

from .base import MISSING, TypeDescriptor
from .composite import DictionaryType, ListType, is_sequence
from .scalars import AnyType, BooleanType, NullableType, NumberType, StringType


def infer_type(value: Any) -> TypeDescriptor:
    """Build the most specific descriptor describing ``value``.

    The returned descriptor uses ``value`` itself as its default, and nested
    descriptors keep the nested values as theirs. A list takes its element
    type from its first element; an empty list, or one whose other elements
    do not fit the first element's type, gets an ``AnyType`` element.

    Example:
        t = infer_type({"theme": "dark", "sizes": [12, 14]})
        # DictionaryType({"theme": StringType(), "sizes": ListType(NumberType())})
    """
    if isinstance(value, Mapping):
        fields = {key: infer_type(item) for key, item in value.items()}
        return DictionaryType(fields, default_value=value)

    if is_sequence(value):
        element: TypeDescriptor = AnyType()
        if value:
            first = infer_type(value[0])
            if all(first.is_valid(item) for item in value):
                element = first
        return ListType(element, default_value=value)

    if isinstance(value, bool):
        return BooleanType(default_value=value)
    if isinstance(value, (int, float)) and NumberType().is_valid(value):
        return NumberType(default_value=value)
    if isinstance(value, str):
        return StringType(default_value=value)
    if value is None or value is MISSING:
        return NullableType()
    return AnyType(default_value=value)
