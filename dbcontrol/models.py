"""
Core types for the data-access layer.

Enums: ResultShapeEnum, ExecuteModeEnum.
Descriptors: TableDescriptor, TriggerDescriptor, Statement, ExecResult.
Value carrier: SqlValue (null, integer, real, text, blob).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, TypeAlias

SqlValue: TypeAlias = None | int | float | str | bytes

# Column name -> value. Used for records, conditions and update values.
ValueMap: TypeAlias = dict[str, SqlValue]

# dict shape -> list of records, list shape -> list of positional rows
ResultSet: TypeAlias = list[dict[str, Any]] | list[list[Any]]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ResultShapeEnum(str, Enum):
    """Caller-selected form of a result set."""

    DICT = "dict"
    LIST = "list"

    @classmethod
    def from_flag(cls, return_as_dict: bool) -> "ResultShapeEnum":
        return cls.DICT if return_as_dict else cls.LIST


class ExecuteModeEnum(str, Enum):
    """EXEC returns affected-row information; QUERY returns materialized rows."""

    EXEC = "exec"
    QUERY = "query"


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass
class TableDescriptor:
    """CREATE TABLE input: column -> declared type, FK column -> "table(column)"."""

    name: str
    attributes: dict[str, str]
    foreign_keys: dict[str, str] = field(default_factory=dict)


@dataclass
class TriggerDescriptor:
    """CREATE TRIGGER input. ``predicate`` and ``body`` are raw SQL fragments."""

    name: str
    action: str
    table: str
    predicate: str
    body: str


class Statement(NamedTuple):
    """SQL text plus its positional bound parameters."""

    text: str
    params: tuple[SqlValue, ...] = ()


class ExecResult(NamedTuple):
    """Outcome of an EXEC-mode statement (-1 when the engine does not report it)."""

    rowcount: int
