"""
Table management: POST /tables creates every table in the body.

Stops at the first failing table; earlier tables are kept.
"""

from typing import Any

from fastapi import APIRouter

from dbcontrol.api.deps import ExecutorDep
from dbcontrol.api.response import ERROR_RESPONSES
from dbcontrol.schemas import StatusOut, TablesCreate

router = APIRouter(prefix="/tables", tags=["tables"], responses=ERROR_RESPONSES)


@router.post("", response_model=StatusOut, response_model_exclude_none=True)
def create_tables(executor: ExecutorDep, body: TablesCreate) -> Any:
    """CREATE TABLE IF NOT EXISTS for each entry of ``tables``."""
    executor.create_tables(body.descriptors(), database=body.database)
    return StatusOut()
