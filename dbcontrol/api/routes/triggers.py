from typing import Any

from fastapi import APIRouter

from dbcontrol.api.deps import ExecutorDep
from dbcontrol.api.response import ERROR_RESPONSES
from dbcontrol.schemas import StatusOut, TriggerCreate

router = APIRouter(prefix="/trigger", tags=["triggers"], responses=ERROR_RESPONSES)


@router.post("", response_model=StatusOut, response_model_exclude_none=True)
def create_trigger(executor: ExecutorDep, body: TriggerCreate) -> Any:
    """
    CREATE TRIGGER IF NOT EXISTS. The WHEN predicate and body are raw SQL
    supplied by the caller.
    """
    executor.create_trigger(body.descriptor(), database=body.database)
    return StatusOut()
