"""
SQL statement builders.

Pure functions: each returns a ``Statement(text, params)`` and touches no
database. Identifiers go through ``validate_identifier`` before they are
interpolated; values only ever travel in ``params`` as ``?`` placeholders, so
``text.count("?") == len(params)`` for every structured builder.

Raw surfaces (not parsed, trusted to the caller):
- ``build_raw``: the whole statement.
- ``build_create_trigger``: the WHEN predicate and the trigger body.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from dbcontrol.core.errors import InvalidInput
from dbcontrol.engines.sql.identifiers import (
    parse_reference,
    validate_column_type,
    validate_identifier,
    validate_identifiers,
)
from dbcontrol.engines.sql.values import to_sql_values, to_value_map
from dbcontrol.models import SqlValue, Statement, TableDescriptor, TriggerDescriptor

_TRIGGER_ACTION_RE = re.compile(
    r"^(?P<timing>BEFORE|AFTER|INSTEAD\s+OF)\s+"
    r"(?P<event>INSERT|DELETE|UPDATE(?:\s+OF\s+(?P<columns>[^;]+))?)$",
    re.IGNORECASE,
)


def _equalities(
    mapping: Mapping[str, Any], separator: str
) -> tuple[str, tuple[SqlValue, ...]]:
    """``a = ?<sep>b = ?`` plus the values in the same order."""
    values = to_value_map(mapping)
    columns = validate_identifiers(values.keys())
    clause = separator.join(f"{c} = ?" for c in columns)
    return clause, tuple(values.values())


def _where(conditions: Mapping[str, Any] | None) -> tuple[str, tuple[SqlValue, ...]]:
    """`` WHERE a = ? AND b = ?`` or empty when there are no conditions."""
    if not conditions:
        return "", ()
    clause, params = _equalities(conditions, " AND ")
    return f" WHERE {clause}", params


def build_create_table(table: TableDescriptor) -> Statement:
    """``CREATE TABLE IF NOT EXISTS`` with one clause per column, then one per foreign key."""
    name = validate_identifier(table.name)
    if not table.attributes:
        raise InvalidInput(f"Table {name!r} needs at least one column")

    clauses: list[str] = []
    for column, declared in table.attributes.items():
        col = validate_identifier(column)
        clauses.append(f"{col} {validate_column_type(col, declared)}")

    for column, reference in (table.foreign_keys or {}).items():
        col = validate_identifier(column)
        ref_table, ref_column = parse_reference(reference)
        clauses.append(
            f"FOREIGN KEY ({col}) REFERENCES {ref_table}({ref_column}) "
            "ON UPDATE CASCADE ON DELETE CASCADE"
        )

    return Statement(f"CREATE TABLE IF NOT EXISTS {name} ({', '.join(clauses)});")


def build_insert(relation: str, record: Mapping[str, Any]) -> Statement:
    """One placeholder per field; params follow the column order."""
    name = validate_identifier(relation)
    values = to_value_map(record)
    if not values:
        raise InvalidInput("Insert needs at least one column value")
    columns = validate_identifiers(values.keys())
    placeholders = ", ".join("?" for _ in columns)
    text = f"INSERT INTO {name} ({', '.join(columns)}) VALUES ({placeholders});"
    return Statement(text, tuple(values.values()))


def build_delete(relation: str, conditions: Mapping[str, Any] | None) -> Statement:
    """Empty conditions omit WHERE and delete every row."""
    name = validate_identifier(relation)
    where, params = _where(conditions)
    return Statement(f"DELETE FROM {name}{where};", params)


def build_select(
    relation: str,
    conditions: Mapping[str, Any] | None = None,
    columns: Sequence[str] | None = None,
) -> Statement:
    """``SELECT <columns|*> FROM relation [WHERE ...]``."""
    name = validate_identifier(relation)
    projection = list(columns or [])
    if projection == ["*"]:
        projection = []
    cols = ", ".join(validate_identifiers(projection)) if projection else "*"
    where, params = _where(conditions)
    return Statement(f"SELECT {cols} FROM {name}{where};", params)


def build_update(
    relation: str,
    conditions: Mapping[str, Any] | None,
    new_values: Mapping[str, Any],
) -> Statement:
    """
    ``UPDATE relation SET ... [WHERE ...]``. Params are SET values then WHERE values.

    Empty conditions update every row, same as DELETE without WHERE.
    """
    name = validate_identifier(relation)
    if not new_values:
        raise InvalidInput("Update needs at least one new value")
    set_clause, set_params = _equalities(new_values, ", ")
    where, where_params = _where(conditions)
    return Statement(f"UPDATE {name} SET {set_clause}{where};", set_params + where_params)


def build_create_trigger(trigger: TriggerDescriptor) -> Statement:
    """
    ``CREATE TRIGGER IF NOT EXISTS ... FOR EACH ROW [WHEN (predicate)] BEGIN body; END;``

    Name, table and the action keywords are validated. ``predicate`` and ``body``
    are raw SQL and are inserted as given; an empty predicate drops the WHEN clause.
    """
    name = validate_identifier(trigger.name)
    table = validate_identifier(trigger.table)
    action = _normalize_trigger_action(trigger.action)

    body = (trigger.body or "").strip().rstrip(";").rstrip()
    if not body:
        raise InvalidInput("Trigger body must not be empty")
    predicate = (trigger.predicate or "").strip()
    when = f" WHEN ({predicate})" if predicate else ""

    return Statement(
        f"CREATE TRIGGER IF NOT EXISTS {name} {action} ON {table} "
        f"FOR EACH ROW{when} BEGIN {body}; END;"
    )


def build_raw(sql: str, params: Sequence[Any] | None = None) -> Statement:
    """Pass-through for caller-written SQL. Values are still bound, never formatted."""
    if not isinstance(sql, str) or not sql.strip():
        raise InvalidInput("sql_statement must be a non-empty string")
    return Statement(sql, to_sql_values(params or ()))


def _normalize_trigger_action(action: str) -> str:
    m = _TRIGGER_ACTION_RE.match((action or "").strip())
    if m is None:
        raise InvalidInput(
            "Trigger action must be BEFORE, AFTER or INSTEAD OF followed by "
            f"INSERT, DELETE or UPDATE [OF columns]: {action!r}"
        )
    timing = " ".join(m.group("timing").upper().split())
    event = m.group("event").split()[0].upper()
    if m.group("columns"):
        columns = validate_identifiers(c.strip() for c in m.group("columns").split(","))
        event = f"{event} OF {', '.join(columns)}"
    return f"{timing} {event}"
