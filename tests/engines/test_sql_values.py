"""Unit tests for engines.sql.values: bound-parameter value carrier."""

import pytest

from dbcontrol.core.errors import InvalidInput
from dbcontrol.engines.sql.values import to_sql_value, to_sql_values, to_value_map


@pytest.mark.parametrize(
    "value", [None, 0, -7, 3.5, "", "text", b"\x00\xff"]
)
def test_native_values_pass_through(value) -> None:
    assert to_sql_value(value) == value


def test_booleans_become_integers() -> None:
    assert to_sql_value(True) == 1
    assert to_sql_value(False) == 0
    assert type(to_sql_value(True)) is int


def test_bytearray_becomes_bytes() -> None:
    assert to_sql_value(bytearray(b"ab")) == b"ab"


@pytest.mark.parametrize("value", [{"a": 1}, [1, 2], (1,), object()])
def test_unsupported_values_rejected(value) -> None:
    with pytest.raises(InvalidInput, match="Unsupported value type"):
        to_sql_value(value)


def test_to_sql_values_keeps_order() -> None:
    assert to_sql_values([1, "a", None, True]) == (1, "a", None, 1)


def test_to_value_map_keeps_key_order() -> None:
    out = to_value_map({"b": 2, "a": True, "c": None})
    assert list(out) == ["b", "a", "c"]
    assert out == {"b": 2, "a": 1, "c": None}


def test_to_value_map_none_is_empty() -> None:
    assert to_value_map(None) == {}


def test_to_value_map_rejects_non_mapping() -> None:
    with pytest.raises(InvalidInput, match="JSON object"):
        to_value_map([("a", 1)])  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [-(2**63), 2**63 - 1])
def test_integer_range_bounds_accepted(value) -> None:
    assert to_sql_value(value) == value


@pytest.mark.parametrize("value", [2**63, 2**64, -(2**63) - 1])
def test_integer_outside_64_bit_range_rejected(value) -> None:
    with pytest.raises(InvalidInput, match="64-bit INTEGER range"):
        to_sql_value(value)


def test_lone_surrogate_text_rejected() -> None:
    with pytest.raises(InvalidInput, match="not valid UTF-8"):
        to_sql_value("ab\ud800")


def test_non_ascii_text_passes_through() -> None:
    assert to_sql_value("naïve ✓") == "naïve ✓"
