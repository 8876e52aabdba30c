"""Success / error envelopes shared by every route."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fooder.core.errors import AppError, InternalError

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
}


def _encode(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    if isinstance(payload, list):
        return [_encode(p) for p in payload]
    return jsonable_encoder(payload)


def success(payload: Any, status_code: int = 200) -> JSONResponse:
    """Wrap a payload as ``{"data": ...}``."""
    return JSONResponse(
        status_code=status_code,
        content={"data": _encode(payload)},
        headers=CORS_HEADERS,
    )


def error(status_code: int, code: str, message: str) -> JSONResponse:
    """Render ``{"error": {"code": ..., "message": ...}}``."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
        headers=CORS_HEADERS,
    )


def from_app_error(exc: AppError) -> JSONResponse:
    message = exc.public_message if isinstance(exc, InternalError) else exc.message
    return error(exc.status_code, exc.code, message)


def internal_error() -> JSONResponse:
    return error(500, InternalError.code, InternalError.public_message)
