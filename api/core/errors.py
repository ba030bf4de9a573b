"""
Application error types.

Anything raised below a service boundary may carry its own `status_code` and
`detail`; the boundary in `core/responses.py` reports those when present.
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

