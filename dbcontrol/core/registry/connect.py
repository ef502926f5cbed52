"""
Connection helpers for the configured SQLite databases.

Each logical database is one SQLAlchemy ``Engine`` (its own connection pool).
Statements are sent with ``exec_driver_sql`` so the driver's ``?`` placeholders
and positional parameter tuples are used as-is.
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.pool import StaticPool

from dbcontrol.core.config import settings

_log = logging.getLogger(__name__)

_MEMORY_PATHS = ("", ":memory:")


def sqlite_url(path: str) -> str:
    if path in _MEMORY_PATHS:
        return "sqlite://"
    return f"sqlite:///{path}"


def open_database(path: str, *, busy_timeout: float | None = None) -> Engine:
    """
    Create the engine for a SQLite file (or ``:memory:``).

    - check_same_thread=False: pooled connections move between worker threads.
    - timeout: how long a writer waits on a locked file before failing.
    - In-memory databases use a single shared connection (StaticPool) so every
      caller sees the same data.
    - Every checkout starts with foreign-key enforcement off; callers that want
      it turn it on for their own statement (see ``set_pragma``).
    """
    timeout = settings.SQLITE_BUSY_TIMEOUT if busy_timeout is None else busy_timeout
    kwargs: dict[str, Any] = {
        "connect_args": {"check_same_thread": False, "timeout": timeout},
    }
    if path in _MEMORY_PATHS:
        kwargs["poolclass"] = StaticPool
    engine = create_engine(sqlite_url(path), **kwargs)
    event.listen(engine, "checkout", _reset_session_pragmas)
    return engine


def _reset_session_pragmas(
    dbapi_connection: Any, connection_record: Any, connection_proxy: Any
) -> None:
    # a pooled connection may still carry foreign_keys=ON from its previous user
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys = OFF")
    finally:
        cursor.close()


def ping(engine: Engine) -> None:
    """Open a connection and run SELECT 1; raises on failure."""
    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1").scalar()


def execute(
    conn: Connection,
    sql: str,
    params: Sequence[Any] | None = None,
) -> CursorResult[Any]:
    """
    Run one statement with positional parameters and return the cursor result.
    Caller reads rows (query) or ``rowcount`` (exec).
    """
    _log.debug("SQL: %s params=%r", sql, params)
    if params:
        return conn.exec_driver_sql(sql, tuple(params))
    return conn.exec_driver_sql(sql)


def set_pragma(conn: Connection, pragma: str, value: str) -> bool:
    """
    Apply ``PRAGMA <pragma> = <value>`` on this connection.

    Returns False (and logs) instead of raising: pragmas are session tuning,
    the statement that follows does not depend on them succeeding.
    """
    try:
        result = conn.exec_driver_sql(f"PRAGMA {pragma} = {value}")
        result.close()
        return True
    except Exception as e:
        _log.warning("PRAGMA %s = %s failed: %s", pragma, value, e)
        return False
