"""Error descriptors and the error factory used by ``Result.fail_if``.

Every descriptor carries two views of the same failure: the internal one
(code, message, cause, context) that only ever reaches the logs, and the
external ``{code, message}`` pair that is safe to hand to a client.
"""
from __future__ import annotations
import traceback
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog

_logger = structlog.get_logger("teamboard.errors")


@dataclass(frozen=True)
class ExternalError:
    code: int
    message: str

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


@dataclass
class ErrorDescriptor:
    code: int
    message: str
    external: ExternalError
    cause: Optional[BaseException] = None
    context: Optional[dict] = field(default=None, repr=False)


def _error_details(cause: Optional[BaseException]) -> Any:
    if cause is None:
        return "N/A"
    details = {"type": type(cause).__name__, "message": str(cause)}
    details.update({k: v for k, v in vars(cause).items() if not k.startswith("_")})
    return details


def _stack(cause: Optional[BaseException]) -> str:
    if cause is not None and cause.__traceback__ is not None:
        return "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))
    return "".join(traceback.format_stack(limit=8)[:-2]) or "N/A"


def error_factory(
    external_message: str,
    external_code: int,
    internal_message: Optional[str] = None,
    internal_code: Optional[int] = None,
    cause: Optional[BaseException] = None,
    context: Optional[dict] = None,
    logger=None,
) -> ErrorDescriptor:
    """
    Build an ErrorDescriptor and log it.
    Logging is best-effort: a broken logger never prevents the descriptor from being returned.
    """
    internal_message = external_message if internal_message is None else internal_message
    internal_code = external_code if internal_code is None else internal_code

    descriptor = ErrorDescriptor(
        code=internal_code,
        message=internal_message,
        external=ExternalError(code=external_code, message=external_message),
        cause=cause,
        context=context,
    )

    log = logger if logger is not None else _logger
    try:
        log.error(
            internal_message,
            message=internal_message,
            code=internal_code,
            external=descriptor.external.to_dict(),
            function="error_factory",
            error_details=_error_details(cause),
            request_details=context or "N/A",
            stack=_stack(cause),
        )
    except Exception:  # noqa: BLE001
        pass

    return descriptor
