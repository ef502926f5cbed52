"""
Raw SQL: POST /sql

Privileged endpoint: the statement text is run as given. Values in
``values_tuple`` are still bound to ``?`` placeholders.
"""

from typing import Any

from fastapi import APIRouter

from dbcontrol.api.deps import ExecutorDep
from dbcontrol.api.response import ERROR_RESPONSES, encode_result, rowcount_of
from dbcontrol.models import ExecResult
from dbcontrol.schemas import ResultOut, SqlExecute, StatusOut

router = APIRouter(prefix="/sql", tags=["sql"], responses=ERROR_RESPONSES)


@router.post("", response_model=ResultOut | StatusOut)
def execute_sql(executor: ExecutorDep, body: SqlExecute) -> Any:
    """
    query_mode=true returns rows in the requested shape; otherwise success + rowcount.

    ``sql_statement`` must hold exactly one statement; a multi-statement script
    is rejected by the driver and reported as an engine error.
    """
    out = executor.execute_raw(
        body.sql_statement,
        body.values_tuple,
        query_mode=body.query_mode,
        foreign_keys=body.fk_mode,
        shape=body.shape,
        placeholders_mode=body.placeholders_mode,
        database=body.database,
    )
    if isinstance(out, ExecResult):
        return StatusOut(rowcount=rowcount_of(out))
    return ResultOut(result=encode_result(out))
