"""Structural type descriptors.

Each descriptor validates a value, reporting every failing location as a
path, and knows a default value for its domain.

Example:
    from typedstore.schema import dictionary, list_of, number, string

    settings = dictionary({
        "name": string(min_length=1, default_value="untitled"),
        "sizes": list_of(number(integer=True, minimum=1)),
    })

    settings.validate({"name": "", "sizes": [12, 0]}).paths
    # [["name"], ["sizes", 1]]
    settings.default_value
    # {"name": "untitled", "sizes": []}
"""

from .base import (
    MISSING,
    DescriptorError,
    Key,
    Kind,
    Path,
    TypeDescriptor,
    ValidatingResult,
)
from .scalars import AnyType, BooleanType, NullableType, NumberType, StringType
from .composite import DictionaryType, ListType, UnionType
from .inference import infer_type

# Short constructors
any_value = AnyType
boolean = BooleanType
string = StringType
number = NumberType
nullable = NullableType
dictionary = DictionaryType
list_of = ListType
union = UnionType

__all__ = [
    "MISSING",
    "DescriptorError",
    "Key",
    "Kind",
    "Path",
    "TypeDescriptor",
    "ValidatingResult",
    # Leaf descriptors
    "AnyType",
    "BooleanType",
    "StringType",
    "NumberType",
    "NullableType",
    # Composite descriptors
    "DictionaryType",
    "ListType",
    "UnionType",
    # Inference
    "infer_type",
    # Short constructors
    "any_value",
    "boolean",
    "string",
    "number",
    "nullable",
    "dictionary",
    "list_of",
    "union",
]
