"""
Result materializer.

Turns a live cursor into one of two caller-selected shapes:

    dict -> [{"id": 1, "name": "a"}, ...]   (column name -> value)
    list -> [[1, "a"], ...]                  (values in column order)

Column names are read once; engine column order is kept in both shapes.
NULL stays as ``None`` under its key. The cursor is always closed before
returning, including when a row fetch fails part way through.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from dbcontrol.core.errors import InvalidInput, ResourceError
from dbcontrol.models import ResultSet, ResultShapeEnum

_log = logging.getLogger(__name__)


class RowCursor(Protocol):
    """What the materializer needs from a result: SQLAlchemy CursorResult fits."""

    def keys(self) -> Any: ...

    def __iter__(self) -> Any: ...

    def close(self) -> None: ...


def materialize(cursor: RowCursor, shape: ResultShapeEnum | str) -> ResultSet:
    """Drain *cursor* into *shape* and close it."""
    try:
        shape = _resolve_shape(shape)
        columns = list(cursor.keys())
        if shape == ResultShapeEnum.DICT:
            return rows_to_dicts(cursor, columns)
        return rows_to_lists(cursor, columns)
    except InvalidInput:
        raise
    except Exception as e:
        _log.error("Reading query result failed: %s", e, exc_info=True)
        raise ResourceError(f"Reading query result failed: {e}") from e
    finally:
        try:
            cursor.close()
        except Exception:
            _log.warning("Closing result cursor failed", exc_info=True)


def _resolve_shape(shape: ResultShapeEnum | str) -> ResultShapeEnum:
    try:
        return ResultShapeEnum(shape)
    except ValueError:
        raise InvalidInput(
            f"Unknown result shape {shape!r}; expected 'dict' or 'list'"
        ) from None


def rows_to_dicts(rows: Any, columns: list[str]) -> list[dict[str, Any]]:
    return [dict(zip(columns, row, strict=True)) for row in rows]


def rows_to_lists(rows: Any, columns: list[str]) -> list[list[Any]]:
    width = len(columns)
    out: list[list[Any]] = []
    for row in rows:
        values = list(row)
        if len(values) != width:
            raise ValueError(f"Row has {len(values)} values for {width} columns")
        out.append(values)
    return out
