"""
Record CRUD on any table: /record

POST   insert (JSON body)
GET    query  (?relation=&conditions=<json>&to_query=a&to_query=b&return_as_dict=true)
PUT    update (JSON body)
DELETE delete (?relation=&conditions=<json>); conditions is required, "{}" deletes all rows
"""

import json
from typing import Any

from fastapi import APIRouter, Query

from dbcontrol.api.deps import ExecutorDep
from dbcontrol.api.response import ERROR_RESPONSES, encode_result, rowcount_of
from dbcontrol.core.errors import InvalidInput
from dbcontrol.models import ResultShapeEnum
from dbcontrol.schemas import RecordInsert, RecordUpdate, ResultOut, StatusOut

router = APIRouter(prefix="/record", tags=["records"], responses=ERROR_RESPONSES)


def _parse_conditions(raw: str | None) -> dict[str, Any]:
    """Decode the ``conditions`` query parameter (a JSON object)."""
    if raw is None or raw == "":
        return {}
    try:
        conditions = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"Invalid JSON for conditions: {e}") from e
    if not isinstance(conditions, dict):
        raise InvalidInput("conditions must be a JSON object")
    return conditions


@router.post("", response_model=StatusOut, response_model_exclude_none=True)
def insert_record(executor: ExecutorDep, body: RecordInsert) -> Any:
    """Insert one row into ``relation``."""
    result = executor.insert_record(body.relation, body.records, database=body.database)
    return StatusOut(rowcount=rowcount_of(result))


@router.get("", response_model=ResultOut)
def query_records(
    executor: ExecutorDep,
    relation: str,
    conditions: str | None = None,
    to_query: list[str] = Query(default=[]),
    return_as_dict: bool = False,
    database: str | None = None,
) -> Any:
    """Select rows matching every condition; ``to_query`` limits the columns."""
    rows = executor.query_records(
        relation,
        _parse_conditions(conditions),
        to_query,
        shape=ResultShapeEnum.from_flag(return_as_dict),
        database=database,
    )
    return ResultOut(result=encode_result(rows))


@router.put("", response_model=StatusOut, response_model_exclude_none=True)
def update_record(executor: ExecutorDep, body: RecordUpdate) -> Any:
    """Set ``new_values`` on rows matching ``conditions``."""
    result = executor.update_record(
        body.relation, body.conditions, body.new_values, database=body.database
    )
    return StatusOut(rowcount=rowcount_of(result))


@router.delete("", response_model=StatusOut, response_model_exclude_none=True)
def delete_record(
    executor: ExecutorDep,
    relation: str,
    conditions: str,
    database: str | None = None,
) -> Any:
    """Delete rows matching ``conditions``."""
    result = executor.delete_record(
        relation, _parse_conditions(conditions), database=database
    )
    return StatusOut(rowcount=rowcount_of(result))
