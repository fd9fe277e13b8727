"""Exception handlers producing the canonical error body."""

import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from anihub.config import settings
from anihub.core.exceptions import AniHubException
from anihub.schemas.common import ErrorResponse

logger = structlog.get_logger(__name__)


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={**ErrorResponse(message=message).model_dump(), **extra},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # Drop the leading "body"/"query"/"path" segment
    loc = [str(part) for part in first.get("loc", ())[1:]]
    msg = first.get("msg", "Invalid value")
    if first.get("type") == "missing":
        msg = "Field required"
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def anihub_exception_handler(request: Request, exc: AniHubException) -> JSONResponse:
    logger.info(
        "request_failed",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.message,
    )
    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_error(exc)
    logger.info("request_validation_failed", path=request.url.path, error=message)
    return error_response(400, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return error_response(exc.status_code, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    if settings.is_production:
        return error_response(500, "Internal Server Error")
    return error_response(
        500,
        "Internal Server Error",
        detail=str(exc),
        stack=traceback.format_exception(type(exc), exc, exc.__traceback__),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(AniHubException, anihub_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
