"""FastAPI application entrypoint."""

import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from fooder.api.routes import api_router
from fooder.core.config import get_settings
from fooder.core.database import build_engine, build_session_factory, init_db
from fooder.core.errors import AppError, InternalError, describe_validation_errors
from fooder.core.responses import error, from_app_error, internal_error

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


@asynccontextmanager
async def lifespan(app_: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    engine = build_engine(settings)
    await init_db(engine)
    app_.state.session_factory = build_session_factory(engine)
    yield
    await engine.dispose()


app = FastAPI(
    title="Fooder",
    version="0.1.0",
    description="Menu catalog and ordering-schedule admin API",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────
_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _settings.allowed_origins.split(",")],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# ── Error boundary ───────────────────────────────────────────
@app.exception_handler(AppError)
async def app_error_handler(_request: Request, exc: AppError) -> Response:
    if isinstance(exc, InternalError):
        logger.error("Internal error: %s", exc.message, exc_info=exc)
    return from_app_error(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError) -> Response:
    return error(400, "VALIDATION_ERROR", describe_validation_errors(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> Response:
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return error(exc.status_code, code, str(exc.detail))


@app.middleware("http")
async def unhandled_error_boundary(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Anything that escaped the typed handlers becomes a generic 500."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return internal_error()


# ── API routes ───────────────────────────────────────────────
app.include_router(api_router)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok"}
