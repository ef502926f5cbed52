import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.middleware.cors import CORSMiddleware

from dbcontrol.api.main import api_router
from dbcontrol.api.response import error_response
from dbcontrol.core.config import settings
from dbcontrol.core.errors import DataAccessError, EngineError
from dbcontrol.core.registry import DatabaseRegistry

logging.basicConfig(level=settings.LOG_LEVEL.upper())
_logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open every configured database before serving; any failure aborts startup."""
    registry = DatabaseRegistry.open_all(settings.databases)
    app.state.registry = registry
    _logger.info("Serving databases: %s", ", ".join(registry.names()))
    try:
        yield
    finally:
        registry.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Exception handlers: { status: "error", message } envelope
# ---------------------------------------------------------------------------


@app.exception_handler(DataAccessError)
async def data_access_exception_handler(
    request: Request, exc: DataAccessError
) -> JSONResponse:
    """InvalidInput 400, UnknownDatabase 404, EngineError/ResourceError 500."""
    if not isinstance(exc, EngineError):
        _logger.info("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return error_response(exc.status_code, str(exc))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with a human-readable message instead of raw Pydantic errors."""
    errors = exc.errors()
    messages = []
    for err in errors:
        loc = " → ".join(str(l) for l in err.get("loc", []) if l != "body")
        msg = err.get("msg", "Invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return error_response(422, "; ".join(messages))


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unhandled exceptions: log and return 500 with safe message."""
    _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    message = "Internal server error"
    if settings.ENVIRONMENT == "local":
        message = f"Internal server error: {exc}"
    return error_response(500, message)


# Set all CORS enabled origins
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_V1_STR)
