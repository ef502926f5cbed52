"""
Request/response schemas for the data-access HTTP API.

Tables, records, triggers, raw SQL. Request bodies convert to the core
descriptors (TableDescriptor, TriggerDescriptor) the executor works with.
"""

from typing import Annotated, Any, Literal

from pydantic import Field
from sqlmodel import SQLModel

from dbcontrol.models import ResultShapeEnum, TableDescriptor, TriggerDescriptor

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

# [attributes] or [attributes, foreign_keys]
TableFields = Annotated[list[dict[str, str]], Field(min_length=1, max_length=2)]


class TablesCreate(SQLModel):
    """Body for POST /tables: table name -> [attributes, foreign_keys]."""

    database: str | None = Field(default=None, max_length=255)
    tables: dict[str, TableFields]

    def descriptors(self) -> list[TableDescriptor]:
        return [
            TableDescriptor(
                name=name,
                attributes=fields[0],
                foreign_keys=fields[1] if len(fields) > 1 else {},
            )
            for name, fields in self.tables.items()
        ]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class RecordInsert(SQLModel):
    """Body for POST /record."""

    database: str | None = Field(default=None, max_length=255)
    relation: str = Field(..., min_length=1, max_length=255)
    records: dict[str, Any]


class RecordUpdate(SQLModel):
    """Body for PUT /record. Empty ``conditions`` updates every row."""

    database: str | None = Field(default=None, max_length=255)
    relation: str = Field(..., min_length=1, max_length=255)
    conditions: dict[str, Any] = Field(default_factory=dict)
    new_values: dict[str, Any]


# ---------------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------------


class TriggerCreate(SQLModel):
    """
    Body for POST /trigger.

    ``triggering_event`` (the WHEN predicate) and ``sql_operation`` (the body)
    are raw SQL fragments and are not validated.
    """

    database: str | None = Field(default=None, max_length=255)
    trigger_name: str = Field(..., min_length=1, max_length=255)
    action: str = Field(
        ..., min_length=1, description="e.g. 'AFTER INSERT', 'BEFORE UPDATE OF price'"
    )
    table_name: str = Field(..., min_length=1, max_length=255)
    triggering_event: str = Field(default="", description="WHEN predicate; empty = always")
    sql_operation: str = Field(..., min_length=1, description="Statement run per row")

    def descriptor(self) -> TriggerDescriptor:
        return TriggerDescriptor(
            name=self.trigger_name,
            action=self.action,
            table=self.table_name,
            predicate=self.triggering_event,
            body=self.sql_operation,
        )


# ---------------------------------------------------------------------------
# Raw SQL
# ---------------------------------------------------------------------------


class SqlExecute(SQLModel):
    """Body for POST /sql. Statement text is executed as given."""

    database: str | None = Field(default=None, max_length=255)
    sql_statement: str = Field(..., min_length=1)
    placeholders_mode: bool = Field(
        default=True,
        description="If False, run without parameters; values_tuple must be empty.",
    )
    values_tuple: list[Any] = Field(default_factory=list)
    query_mode: bool = False
    fk_mode: bool = Field(default=False, description="PRAGMA foreign_keys = ON first.")
    return_as_dict: bool = False

    @property
    def shape(self) -> ResultShapeEnum:
        return ResultShapeEnum.from_flag(self.return_as_dict)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class StatusOut(SQLModel):
    """Success envelope for statements that return no rows."""

    status: Literal["success"] = "success"
    rowcount: int | None = None


class ResultOut(SQLModel):
    """Success envelope for queries; blobs are base64 strings."""

    status: Literal["success"] = "success"
    result: list[Any]


class ErrorOut(SQLModel):
    status: Literal["error"] = "error"
    message: str
