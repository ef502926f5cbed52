"""
Execute a built Statement against one registered database.

- EXEC mode:  returns ExecResult(rowcount)
- QUERY mode: returns the materialized rows in the requested shape

Both run on a single pooled connection inside ``engine.begin()``: session
pragmas, the statement and the result read share that connection, and the
transaction commits on success or rolls back on any error.

Driver failures surface as EngineError carrying the SQLite message. There
are no retries: a locked database is reported once.
"""

import logging
from typing import Any

from sqlalchemy import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, ProgrammingError, SQLAlchemyError

from dbcontrol.core.errors import EngineError
from dbcontrol.core.registry import execute, set_pragma
from dbcontrol.core.result_shape import materialize
from dbcontrol.models import (
    ExecResult,
    ExecuteModeEnum,
    ResultSet,
    ResultShapeEnum,
    Statement,
)

_log = logging.getLogger(__name__)


def apply_session_toggles(
    conn: Any, *, foreign_keys: bool = False, write_ahead_log: bool = False
) -> None:
    """Enable FK enforcement and/or WAL journaling on *conn*; failures only log."""
    if foreign_keys:
        set_pragma(conn, "foreign_keys", "ON")
    if write_ahead_log:
        set_pragma(conn, "journal_mode", "WAL")


def dispatch(
    engine: Engine,
    statement: Statement,
    mode: ExecuteModeEnum = ExecuteModeEnum.EXEC,
    *,
    shape: ResultShapeEnum = ResultShapeEnum.DICT,
    foreign_keys: bool = False,
    write_ahead_log: bool = False,
) -> ExecResult | ResultSet:
    """Run *statement* on *engine* in *mode*."""
    sql, params = statement
    try:
        with engine.begin() as conn:
            apply_session_toggles(
                conn, foreign_keys=foreign_keys, write_ahead_log=write_ahead_log
            )
            cur = execute(conn, sql, params)
            if mode == ExecuteModeEnum.QUERY:
                if not cur.returns_rows:
                    # e.g. UPDATE sent in query mode: nothing to read
                    cur.close()
                    return []
                return materialize(cur, shape)
            rowcount = cur.rowcount
            cur.close()
            return ExecResult(rowcount if rowcount is not None else -1)
    except (IntegrityError, ProgrammingError) as e:
        message = _engine_message(e)
        _log.warning("SQL rejected: %s. SQL: %s", message, sql)
        raise EngineError(message, sql=sql) from e
    except DBAPIError as e:
        message = _engine_message(e)
        _log.error("SQL execution failed: %s. SQL: %s", message, sql, exc_info=True)
        raise EngineError(message, sql=sql) from e
    except SQLAlchemyError as e:
        _log.error("SQL execution failed: %s. SQL: %s", e, sql, exc_info=True)
        raise EngineError(str(e), sql=sql) from e


def _engine_message(e: DBAPIError) -> str:
    """The driver's own message (``UNIQUE constraint failed: t.id``), without SQLAlchemy's wrapper text."""
    return str(e.orig) if e.orig is not None else str(e)
