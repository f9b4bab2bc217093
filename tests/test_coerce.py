"""Tests for typedpointer.coerce: null values, kind checks and conversion."""

from __future__ import annotations

from array import array
from collections import OrderedDict, deque
from fractions import Fraction

import pytest
from pydantic import ValidationError

from typedpointer.coerce import coerce_value, matches, null_value
from typedpointer.errors import TypeConstraintViolationError
from typedpointer.pointer import parse
from typedpointer.types import MISSING, JsonKind

# ===========================================================================
# Null values
# ===========================================================================


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (JsonKind.STRING, ""),
        (JsonKind.NUMBER, 0),
        (JsonKind.OBJECT, {}),
        (JsonKind.ARRAY, []),
        (JsonKind.BOOLEAN, False),
    ],
)
def test_null_value(kind, expected):
    value = null_value(kind)
    assert value == expected
    assert type(value) is type(expected)


def test_null_value_of_null_and_any_is_missing():
    assert null_value(JsonKind.NULL) is MISSING
    assert null_value(JsonKind.ANY) is MISSING


def test_null_containers_are_fresh():
    assert null_value(JsonKind.OBJECT) is not null_value(JsonKind.OBJECT)
    assert null_value(JsonKind.ARRAY) is not null_value(JsonKind.ARRAY)


# ===========================================================================
# Kind checks
# ===========================================================================


class TestMatches:
    def test_number_excludes_bool(self):
        assert matches(JsonKind.NUMBER, 1)
        assert matches(JsonKind.NUMBER, 1.5)
        assert matches(JsonKind.NUMBER, Fraction(1, 2))
        assert not matches(JsonKind.NUMBER, True)

    def test_boolean(self):
        assert matches(JsonKind.BOOLEAN, False)
        assert not matches(JsonKind.BOOLEAN, 0)

    def test_object_is_any_mapping(self):
        assert matches(JsonKind.OBJECT, OrderedDict())
        assert not matches(JsonKind.OBJECT, [])

    def test_array(self):
        assert matches(JsonKind.ARRAY, [])
        assert matches(JsonKind.ARRAY, array("d"))
        assert not matches(JsonKind.ARRAY, (1,))
        assert not matches(JsonKind.ARRAY, "abc")

    def test_null(self):
        assert matches(JsonKind.NULL, None)
        assert not matches(JsonKind.NULL, MISSING)

    def test_any(self):
        assert matches(JsonKind.ANY, object())


# ===========================================================================
# coerce_value
# ===========================================================================


class TestCoerceValue:
    def test_missing_uses_null_value(self):
        assert coerce_value(MISSING, parse("/a::string")) == ""

    def test_unconstrained_passes_through(self):
        value = object()
        assert coerce_value(value, parse("/a")) is value

    def test_matching_value_keeps_identity(self):
        value = {"k": 1}
        assert coerce_value(value, parse("/a::object")) is value

    def test_tuple_to_list(self):
        assert coerce_value((1, "x"), parse("/a::array")) == [1, "x"]

    def test_deque_to_list(self):
        assert coerce_value(deque([1, 2]), parse("/a::array")) == [1, 2]

    @pytest.mark.parametrize(
        ("text", "value"),
        [
            ("/a::number", "12"),
            ("/a::number", True),
            ("/a::string", 12),
            ("/a::boolean", "true"),
            ("/a::boolean", 1),
            ("/a::null", 0),
            ("/a::array", "abc"),
            ("/a::array", {"k": 1}),
            ("/a::object", [1, 2]),
        ],
    )
    def test_rejects(self, text, value):
        with pytest.raises(TypeConstraintViolationError):
            coerce_value(value, parse(text))

    def test_error_details(self):
        ptr = parse("/price::number")
        with pytest.raises(TypeConstraintViolationError, match="not a valid number") as exc_info:
            coerce_value("cheap", ptr)
        err = exc_info.value
        assert err.value == "cheap"
        assert err.pointer is ptr
        assert "/price::number" in str(err)
        assert isinstance(err.__cause__, ValidationError)
