"""
Response envelope shared by every blog/user endpoint.

Shape on the wire:
    {"status_code": 200, "message": "...", "data": [...] | {...}, "error": ...}

`error` is only present when diagnostics are exposed (EXPOSE_ERROR_DETAIL).
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, ParamSpec

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .errors import AppError

logger = logging.getLogger(__name__)

P = ParamSpec("P")

INTERNAL_SERVER_ERROR_MESSAGE = "Internal Server Error"


def expose_error_detail() -> bool:
    return os.environ.get("EXPOSE_ERROR_DETAIL", "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    message: str
    data: Any = field(default_factory=list)
    error: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "status_code": self.status_code,
            "message": self.message,
            "data": self.data,
        }
        if self.error is not None:
            body["error"] = self.error
        return body


def send_response(
    status_code: int,
    message: str,
    data: Any = None,
    error: Any = None,
) -> ApiResponse:
    """
    Build an envelope. `data` defaults to an empty list, like a list endpoint
    with no rows.
    """
    return ApiResponse(
        status_code=status_code,
        message=message,
        data=[] if data is None else data,
        error=error,
    )


def to_json_response(response: ApiResponse) -> JSONResponse:
    return JSONResponse(
        status_code=response.status_code,
        content=jsonable_encoder(response.to_dict()),
    )


def error_response(exc: Exception) -> ApiResponse:
    """
    Report an AppError or HTTPException with its own status/detail.

    Anything else (driver errors included, whose `detail` is raw server text)
    is a generic 500.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = INTERNAL_SERVER_ERROR_MESSAGE
    if isinstance(exc, (AppError, HTTPException)):
        status_code = exc.status_code
        if isinstance(exc.detail, str) and exc.detail:
            message = exc.detail

    error = None
    if expose_error_detail():
        error = {"type": type(exc).__name__, "detail": str(exc)}
    return send_response(status_code, message, [], error)


def service_boundary(
    func: Callable[P, Awaitable[ApiResponse]],
) -> Callable[P, Awaitable[ApiResponse]]:
    """
    Outer error boundary for controller operations.

    Whatever the wrapped operation raises is logged with its traceback and
    turned into an envelope instead of propagating.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> ApiResponse:
        try:
            return await func(*args, **kwargs)
        except Exception as exc:
            logger.exception("operation_failed operation=%s", func.__qualname__)
            return error_response(exc)

    return wrapper
