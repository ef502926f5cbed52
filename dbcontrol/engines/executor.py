"""
Data-access operations.

DataAccessExecutor exposes the logical operations the HTTP layer forwards to:
create_tables, insert_record, delete_record, query_records, update_record,
create_trigger, execute_raw.

Each one: default the database name -> build the Statement (identifier gate,
bound values) -> resolve the engine -> dispatch -> materialize (queries only).
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, cast

from sqlalchemy import Engine

from dbcontrol.core.config import settings
from dbcontrol.core.errors import EngineError, InvalidInput
from dbcontrol.core.registry import DatabaseRegistry
from dbcontrol.engines.sql import (
    build_create_table,
    build_create_trigger,
    build_delete,
    build_insert,
    build_raw,
    build_select,
    build_update,
    dispatch,
)
from dbcontrol.models import (
    ExecResult,
    ExecuteModeEnum,
    ResultSet,
    ResultShapeEnum,
    Statement,
    TableDescriptor,
    TriggerDescriptor,
)

_log = logging.getLogger(__name__)


class DataAccessExecutor:
    """
    Runs structured and raw operations against a DatabaseRegistry.

    ``database`` is optional everywhere; None or "" means ``default_database``
    (``settings.DEFAULT_DATABASE`` unless overridden).
    """

    def __init__(
        self,
        registry: DatabaseRegistry,
        *,
        default_database: str | None = None,
    ) -> None:
        self.registry = registry
        self.default_database = default_database or settings.DEFAULT_DATABASE

    def resolve(self, database: str | None) -> Engine:
        return self.registry.resolve(database or self.default_database)

    # ------------------------------------------------------------------
    # Structured operations
    # ------------------------------------------------------------------

    def create_tables(
        self,
        tables: Iterable[TableDescriptor],
        *,
        database: str | None = None,
    ) -> list[str]:
        """
        Create each table in order and return the created names.

        Stops at the first failing table; tables created before it stay in place
        (no rollback across tables). The error message names the failing table.
        """
        engine = self.resolve(database)
        created: list[str] = []
        for table in tables:
            try:
                statement = build_create_table(table)
                self._run(engine, statement)
            except EngineError as e:
                raise EngineError(
                    f"Creating table {table.name!r} failed: {e.message}", sql=e.sql
                ) from e
            except InvalidInput as e:
                raise InvalidInput(f"Creating table {table.name!r} failed: {e}") from e
            created.append(table.name)
        return created

    def insert_record(
        self,
        relation: str,
        record: Mapping[str, Any],
        *,
        database: str | None = None,
    ) -> ExecResult:
        statement = build_insert(relation, record)
        return self._run(self.resolve(database), statement)

    def delete_record(
        self,
        relation: str,
        conditions: Mapping[str, Any] | None,
        *,
        database: str | None = None,
    ) -> ExecResult:
        """Empty conditions delete every row of *relation*."""
        statement = build_delete(relation, conditions)
        return self._run(self.resolve(database), statement)

    def query_records(
        self,
        relation: str,
        conditions: Mapping[str, Any] | None = None,
        columns: Sequence[str] | None = None,
        *,
        shape: ResultShapeEnum = ResultShapeEnum.LIST,
        database: str | None = None,
    ) -> ResultSet:
        statement = build_select(relation, conditions, columns)
        return self._query(self.resolve(database), statement, shape)

    def update_record(
        self,
        relation: str,
        conditions: Mapping[str, Any] | None,
        new_values: Mapping[str, Any],
        *,
        database: str | None = None,
    ) -> ExecResult:
        """Empty conditions update every row of *relation*."""
        statement = build_update(relation, conditions, new_values)
        return self._run(self.resolve(database), statement)

    def create_trigger(
        self,
        trigger: TriggerDescriptor,
        *,
        database: str | None = None,
    ) -> ExecResult:
        statement = build_create_trigger(trigger)
        return self._run(self.resolve(database), statement)

    # ------------------------------------------------------------------
    # Raw SQL (privileged: statement text is trusted as given)
    # ------------------------------------------------------------------

    def execute_raw(
        self,
        sql: str,
        params: Sequence[Any] | None = None,
        *,
        query_mode: bool = False,
        foreign_keys: bool = False,
        shape: ResultShapeEnum = ResultShapeEnum.LIST,
        placeholders_mode: bool = True,
        database: str | None = None,
    ) -> ExecResult | ResultSet:
        """
        Run caller-written SQL. WAL journaling is always requested on this path;
        FK enforcement only when ``foreign_keys`` is set.

        With ``placeholders_mode=False`` the statement runs without a parameter
        list and a non-empty ``params`` is refused.
        """
        if not placeholders_mode and params:
            raise InvalidInput("values_tuple must be empty when placeholders_mode is false")
        statement = build_raw(sql, params if placeholders_mode else None)
        engine = self.resolve(database)
        mode = ExecuteModeEnum.QUERY if query_mode else ExecuteModeEnum.EXEC
        return dispatch(
            engine,
            statement,
            mode,
            shape=shape,
            foreign_keys=foreign_keys,
            write_ahead_log=True,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _run(engine: Engine, statement: Statement) -> ExecResult:
        _log.debug("Built SQL: %s", statement.text)
        return cast(ExecResult, dispatch(engine, statement, ExecuteModeEnum.EXEC))

    @staticmethod
    def _query(engine: Engine, statement: Statement, shape: ResultShapeEnum) -> ResultSet:
        _log.debug("Built SQL: %s", statement.text)
        return cast(ResultSet, dispatch(engine, statement, ExecuteModeEnum.QUERY, shape=shape))
