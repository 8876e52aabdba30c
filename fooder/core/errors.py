"""Typed application errors rendered into the error envelope."""

from collections.abc import Mapping, Sequence
from typing import Any


class AppError(Exception):
    """Base for every error that maps onto a client-visible status + code."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class InternalError(AppError):
    """Server-side failure. The message is logged, never sent to the client."""

    status_code = 500
    code = "INTERNAL_ERROR"
    public_message = "Internal server error"


class PIICodecError(InternalError):
    """Sealing or unsealing a PII field failed."""


def describe_validation_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """Flatten pydantic error dicts into ``"field: message, field: message"``."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        message = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return ", ".join(parts) or "Invalid request"
