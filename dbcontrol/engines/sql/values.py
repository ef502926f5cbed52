"""
Bound-parameter value carrier.

Incoming JSON values are converted to the closed SqlValue set right before
they are handed to the driver: None, int, float, str, bytes. Booleans become
1/0 (SQLite has no boolean storage class). Objects and arrays are refused.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from dbcontrol.core.errors import InvalidInput
from dbcontrol.models import SqlValue, ValueMap

# SQLite INTEGER is a signed 64-bit value
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def to_sql_value(value: Any) -> SqlValue:
    """Convert one JSON-like value to a bindable SqlValue."""
    if value is None:
        return None
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        if not _INT_MIN <= value <= _INT_MAX:
            raise InvalidInput(f"Integer {value} is outside the 64-bit INTEGER range")
        return value
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidInput(f"Text value is not valid UTF-8: {e.reason}") from e
        return value
    if isinstance(value, float | bytes):
        return value
    if isinstance(value, bytearray | memoryview):
        return bytes(value)
    raise InvalidInput(
        f"Unsupported value type {type(value).__name__}; "
        "expected null, integer, real, text or blob"
    )


def to_sql_values(values: Iterable[Any]) -> tuple[SqlValue, ...]:
    return tuple(to_sql_value(v) for v in values)


def to_value_map(mapping: Mapping[str, Any] | None) -> ValueMap:
    """Convert every value of a column mapping, preserving key order."""
    if mapping is None:
        return {}
    if not isinstance(mapping, Mapping):
        raise InvalidInput(f"Expected a JSON object, got {type(mapping).__name__}")
    return {k: to_sql_value(v) for k, v in mapping.items()}
