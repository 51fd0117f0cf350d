"""Result → HTTP response mapping shared by every router."""
from __future__ import annotations
from typing import Any

from fastapi.responses import JSONResponse

from teamboard.domain.common.result import Result

_UNSET = object()


def result_response(result: Result, success_body: Any = _UNSET) -> Any:
    """
    Success → ``success_body`` if given, else the result value (FastAPI serializes it, 200).
    Failure → the external error array with the first error's code as HTTP status.
    """
    if result.is_error:
        return JSONResponse(status_code=result.status_code, content=result.to_list())
    return result.value if success_body is _UNSET else success_body


def error_body(code: int, message: str) -> list[dict]:
    return [{"code": code, "message": message}]
