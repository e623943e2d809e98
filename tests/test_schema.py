"""Tests for typedstore.schema descriptors."""

import math
import re

import pytest

from typedstore import DescriptorError, MISSING
from typedstore.schema import (
    AnyType,
    Kind,
    ValidatingResult,
    any_value,
    boolean,
    dictionary,
    list_of,
    nullable,
    number,
    string,
    union,
)
from typedstore.store import Serializer


ALL_DESCRIPTORS = [
    any_value(),
    boolean(),
    string(),
    number(),
    nullable(),
    dictionary({"a": number(), "b": string(), "c": list_of(boolean())}),
    list_of(number()),
    union([boolean(), number()]),
]


class TestDefaults:
    """Every descriptor's default satisfies the descriptor."""

    @pytest.mark.parametrize("descriptor", ALL_DESCRIPTORS, ids=repr)
    def test_default_is_valid(self, descriptor):
        """validate(default_value) is valid."""
        assert descriptor.validate(descriptor.default_value).valid

    @pytest.mark.parametrize("descriptor", ALL_DESCRIPTORS, ids=repr)
    def test_default_survives_serialization(self, descriptor):
        """The default is still valid after a trip through the serializer."""
        serializer = Serializer()
        parsed = serializer.loads(serializer.dumps(descriptor.default_value))
        assert descriptor.validate(parsed).valid

    def test_leaf_defaults(self):
        """Leaf kinds have the documented defaults."""
        assert any_value().default_value is None
        assert boolean().default_value is False
        assert string().default_value == ""
        assert number().default_value == 0
        assert nullable().default_value is None

    def test_configured_defaults(self):
        """Explicit defaults are used."""
        assert any_value(default_value=[1]).default_value == [1]
        assert string(default_value="x").default_value == "x"
        assert number(default_value=2.5).default_value == 2.5

    def test_default_value_is_a_copy(self):
        """Mutating a returned default never changes the descriptor."""
        descriptor = dictionary({"items": list_of(number())})
        first = descriptor.default_value
        first["items"].append(1)
        assert descriptor.default_value == {"items": []}


class TestValidatingResult:
    """Tests for ValidatingResult."""

    def test_ok_has_no_paths(self):
        result = ValidatingResult.ok()
        assert result.valid is True
        assert result.paths is None
        assert bool(result) is True

    def test_fail_defaults_to_root(self):
        result = ValidatingResult.fail()
        assert result.valid is False
        assert result.paths == [[]]
        assert bool(result) is False

    def test_prefixed(self):
        result = ValidatingResult.fail([["x"], []])
        assert result.prefixed("a") == [["a", "x"], ["a"]]


class TestBoolean:
    def test_accepts_booleans_only(self):
        """0 and 1 are not booleans."""
        assert boolean().validate(True).valid
        assert boolean().validate(False).valid
        assert not boolean().validate(0).valid
        assert not boolean().validate(None).valid


class TestString:
    def test_type(self):
        assert string().validate("").valid
        assert not string().validate(1).valid
        assert not string().validate(None).valid

    def test_length_bounds(self):
        """Length must be within [min_length, max_length]."""
        descriptor = string(min_length=2, max_length=3, default_value="ab")
        assert not descriptor.validate("a").valid
        assert descriptor.validate("ab").valid
        assert descriptor.validate("abc").valid
        assert not descriptor.validate("abcd").valid

    def test_pattern_is_searched(self):
        """The pattern matches anywhere unless anchored."""
        assert string(pattern="b", default_value="b").validate("abc").valid
        assert not string(pattern="^b", default_value="b").validate("abc").valid

    def test_compiled_pattern(self):
        descriptor = string(pattern=re.compile(r"^\d+$"), default_value="0")
        assert descriptor.validate("123").valid
        assert not descriptor.validate("12a").valid

    def test_invalid_configuration(self):
        """Inconsistent options raise DescriptorError."""
        with pytest.raises(DescriptorError):
            string(min_length=-1)
        with pytest.raises(DescriptorError):
            string(min_length=5, max_length=2)
        with pytest.raises(DescriptorError):
            string(min_length=1, default_value="")

    def test_constraints_without_default(self):
        """Constraints alone never reject the built-in default."""
        short = string(min_length=1)
        assert short.default_value == ""
        assert not short.validate(short.default_value).valid
        assert string(pattern=r"^a").validate("abc").valid


class TestNumber:
    def test_type(self):
        """Booleans and non-finite floats are rejected."""
        descriptor = number()
        assert descriptor.validate(1).valid
        assert descriptor.validate(-2.5).valid
        assert not descriptor.validate(True).valid
        assert not descriptor.validate("1").valid
        assert not descriptor.validate(math.inf).valid
        assert not descriptor.validate(math.nan).valid

    def test_bounds(self):
        descriptor = number(minimum=0, maximum=10)
        assert descriptor.validate(0).valid
        assert descriptor.validate(10).valid
        assert not descriptor.validate(-0.1).valid
        assert not descriptor.validate(10.5).valid

    def test_integer(self):
        """integer=True rejects fractional values but not 2.0."""
        descriptor = number(integer=True)
        assert descriptor.validate(2).valid
        assert descriptor.validate(2.0).valid
        assert not descriptor.validate(2.5).valid

    def test_invalid_configuration(self):
        with pytest.raises(DescriptorError):
            number(minimum=5, maximum=1)
        with pytest.raises(DescriptorError):
            number(default_value="x")
        with pytest.raises(DescriptorError):
            number(minimum=1, default_value=0)

    def test_bounds_without_default(self):
        positive = number(minimum=1)
        assert positive.default_value == 0
        assert positive.validate(1).valid
        assert number(maximum=-1).repair(5) == 0


class TestNullable:
    def test_accepts_none_and_missing(self):
        assert nullable().validate(None).valid
        assert nullable().validate(MISSING).valid
        assert not nullable().validate(0).valid
        assert not nullable().validate("").valid

    def test_flags(self):
        """Each flag controls one of the two empty values."""
        no_null = nullable(accept_null=False)
        assert not no_null.validate(None).valid
        assert no_null.validate(MISSING).valid
        assert no_null.default_value is MISSING

        no_missing = nullable(accept_missing=False)
        assert no_missing.validate(None).valid
        assert not no_missing.validate(MISSING).valid


class TestDictionary:
    def test_reports_all_failing_fields(self):
        """Both offending fields are reported, not just the first."""
        descriptor = dictionary({"a": number(), "b": string()})
        result = descriptor.validate({"a": "x", "b": 1})
        assert not result.valid
        assert result.paths == [["a"], ["b"]]

    def test_non_mapping_fails_at_root(self):
        descriptor = dictionary({"a": number()})
        assert descriptor.validate([1]).paths == [[]]
        assert descriptor.validate(None).paths == [[]]
        assert descriptor.validate("a").paths == [[]]

    def test_undeclared_fields_are_unconstrained(self):
        descriptor = dictionary({"a": number()})
        assert descriptor.validate({"a": 1, "extra": object()}).valid

    def test_absent_field(self):
        """An absent field only passes when its descriptor accepts MISSING."""
        descriptor = dictionary({"a": number(), "b": nullable()})
        assert descriptor.validate({"a": 1}).valid
        assert descriptor.validate({"b": None}).paths == [["a"]]

    def test_nested_paths(self):
        """Failing paths are prefixed recursively through lists and dicts."""
        descriptor = dictionary({
            "rows": list_of(dictionary({"id": number(), "tags": list_of(string())}))
        })
        value = {"rows": [{"id": 1, "tags": ["a"]}, {"id": "x", "tags": ["b", 2]}]}
        assert descriptor.validate(value).paths == [
            ["rows", 1, "id"],
            ["rows", 1, "tags", 1],
        ]

    def test_synthesized_default(self):
        """Fields whose default is MISSING are left out."""
        descriptor = dictionary({
            "a": number(default_value=3),
            "b": dictionary({"c": string(default_value="x")}),
            "d": nullable(accept_null=False),
        })
        assert descriptor.default_value == {"a": 3, "b": {"c": "x"}}

    def test_explicit_default(self):
        descriptor = dictionary({"a": number()}, default_value={"a": 7})
        assert descriptor.default_value == {"a": 7}

    def test_invalid_configuration(self):
        with pytest.raises(DescriptorError):
            dictionary({"a": 5})
        with pytest.raises(DescriptorError):
            dictionary([number()])
        with pytest.raises(DescriptorError):
            dictionary({"a": number()}, default_value={"a": "x"})

    def test_repair_replaces_only_invalid_fields(self):
        descriptor = dictionary({"a": number(), "b": string()})
        original = {"a": "x", "b": "ok", "c": 1}
        repaired = descriptor.repair(original)
        assert repaired == {"a": 0, "b": "ok", "c": 1}
        assert original["a"] == "x"

    def test_repair_fills_absent_fields(self):
        descriptor = dictionary({"a": number(default_value=4), "b": nullable()})
        assert descriptor.repair({}) == {"a": 4}

    def test_repair_non_mapping(self):
        descriptor = dictionary({"a": number(default_value=4)})
        assert descriptor.repair("nope") == {"a": 4}


class TestList:
    def test_reports_element_index(self):
        result = list_of(number()).validate([1, "x", 3])
        assert not result.valid
        assert result.paths == [[1]]

    def test_reports_every_bad_element(self):
        assert list_of(number()).validate(["a", 1, "b"]).paths == [[0], [2]]

    def test_accepts_tuples(self):
        assert list_of(number()).validate((1, 2)).valid

    def test_rejects_non_sequences(self):
        """Strings and mappings are not lists."""
        assert list_of().validate("abc").paths == [[]]
        assert list_of().validate({"0": 1}).paths == [[]]

    def test_element_defaults_to_any(self):
        descriptor = list_of()
        assert isinstance(descriptor.element, AnyType)
        assert descriptor.validate([1, "a", None]).valid

    def test_repair(self):
        descriptor = list_of(number(default_value=-1))
        assert descriptor.repair([1, "x", 3]) == [1, -1, 3]
        assert descriptor.repair("x") == []


class TestUnion:
    def test_any_member_matches(self):
        descriptor = union([boolean(), number()])
        assert descriptor.validate(True).valid
        assert descriptor.validate(5).valid

    def test_no_match_fails_at_root(self):
        """Member near-misses are not reported."""
        result = union([boolean(), number()]).validate("x")
        assert not result.valid
        assert result.paths == [[]]

    def test_nested_no_match(self):
        descriptor = dictionary({"v": union([number(), string()])})
        assert descriptor.validate({"v": None}).paths == [["v"]]

    def test_default(self):
        """Explicit default, else the first member's default."""
        assert union([string(default_value="s"), number()]).default_value == "s"
        assert union([string(), number()], default_value=3).default_value == 3

    def test_repair_falls_back_to_union_default(self):
        descriptor = union([number(), string()], default_value="none")
        assert descriptor.repair(5) == 5
        assert descriptor.repair(None) == "none"

    def test_invalid_configuration(self):
        with pytest.raises(DescriptorError):
            union([])
        with pytest.raises(DescriptorError):
            union([number(), "string"])
        with pytest.raises(DescriptorError):
            union([number()], default_value="x")


class TestKinds:
    def test_each_descriptor_is_tagged(self):
        kinds = [d.kind for d in ALL_DESCRIPTORS]
        assert kinds == [
            Kind.ANY,
            Kind.BOOLEAN,
            Kind.STRING,
            Kind.NUMBER,
            Kind.NULLABLE,
            Kind.DICTIONARY,
            Kind.LIST,
            Kind.UNION,
        ]
