"""
Response envelope helpers.

{ status: "success" [, result | rowcount] }  /  { status: "error", message }
"""

import base64
from typing import Any

from fastapi.responses import JSONResponse

from dbcontrol.models import ExecResult
from dbcontrol.schemas import ErrorOut

# documented error envelopes, shared by the data routes
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorOut, "description": "Invalid input"},
    404: {"model": ErrorOut, "description": "Unknown database"},
    500: {"model": ErrorOut, "description": "Engine or result error"},
}


def encode_value(value: Any) -> Any:
    """Blobs become base64 text; other SQLite values are already JSON-safe."""
    if isinstance(value, bytes | bytearray | memoryview):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def encode_result(rows: list[Any]) -> list[Any]:
    """Encode blobs in either result shape (list of dicts or list of lists)."""
    out: list[Any] = []
    for row in rows:
        if isinstance(row, dict):
            out.append({k: encode_value(v) for k, v in row.items()})
        else:
            out.append([encode_value(v) for v in row])
    return out


def rowcount_of(result: ExecResult) -> int | None:
    return result.rowcount if result.rowcount >= 0 else None


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorOut(message=message).model_dump(),
    )
