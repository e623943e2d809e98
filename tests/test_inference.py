"""Tests for typedstore.schema.inference."""

import math

from typedstore import MISSING
from typedstore.schema import Kind, infer_type


class TestInferType:
    """Tests for infer_type."""

    def test_scalars(self):
        """Each scalar maps to its descriptor kind."""
        assert infer_type(True).kind is Kind.BOOLEAN
        assert infer_type(3).kind is Kind.NUMBER
        assert infer_type(2.5).kind is Kind.NUMBER
        assert infer_type("x").kind is Kind.STRING
        assert infer_type(None).kind is Kind.NULLABLE
        assert infer_type(MISSING).kind is Kind.NULLABLE

    def test_default_is_the_value(self):
        assert infer_type(True).default_value is True
        assert infer_type(3).default_value == 3
        assert infer_type("x").default_value == "x"

    def test_dictionary(self):
        """Mappings become dictionaries with recursively inferred fields."""
        value = {"theme": "dark", "size": 12, "on": True, "tags": ["a"], "extra": None}
        descriptor = infer_type(value)

        assert descriptor.kind is Kind.DICTIONARY
        assert descriptor.types["theme"].kind is Kind.STRING
        assert descriptor.types["size"].kind is Kind.NUMBER
        assert descriptor.types["on"].kind is Kind.BOOLEAN
        assert descriptor.types["tags"].kind is Kind.LIST
        assert descriptor.types["tags"].element.kind is Kind.STRING
        assert descriptor.types["extra"].kind is Kind.NULLABLE
        assert descriptor.default_value == value
        assert descriptor.validate(value).valid

    def test_nested_defaults(self):
        """Nested descriptors keep the nested values as defaults."""
        descriptor = infer_type({"font": {"size": 12}})
        assert descriptor.types["font"].types["size"].default_value == 12

    def test_inferred_type_rejects_other_shapes(self):
        descriptor = infer_type({"size": 12})
        assert descriptor.validate({"size": "12"}).paths == [["size"]]

    def test_list_uses_first_element(self):
        descriptor = infer_type([1, 2, 3])
        assert descriptor.kind is Kind.LIST
        assert descriptor.element.kind is Kind.NUMBER
        assert not descriptor.validate(["a"]).valid

    def test_empty_list_gets_any_element(self):
        descriptor = infer_type([])
        assert descriptor.element.kind is Kind.ANY
        assert descriptor.validate([1, "a"]).valid

    def test_mixed_list_gets_any_element(self):
        """Elements not fitting the first element's type widen to Any."""
        descriptor = infer_type([1, "a"])
        assert descriptor.element.kind is Kind.ANY
        assert descriptor.default_value == [1, "a"]

    def test_other_values_are_any(self):
        marker = object()
        assert infer_type(marker).kind is Kind.ANY
        assert infer_type(marker).default_value is marker
        assert infer_type(math.nan).kind is Kind.ANY
