# app/error_handlers.py
"""
Global exception handlers: the one place errors become HTTP responses.

Every response uses the envelope
``{"success": false, "error": {"message": ..., "stack": ...}}`` where
``stack`` is only present when the app runs with ``APP_ENV=development``.
Unrecognized exceptions always answer 500 "Internal Server Error"; their
real message only goes to the log.
"""

import logging
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import AppError
from .middleware import original_url

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def _log_error(request: Request, exc: Exception, status_code: int) -> None:
    details = {
        "message": str(exc.__cause__ or exc),
        "url": original_url(request),
        "method": request.method,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if status_code >= 500:
        logger.error("Error occurred: %s", details, exc_info=(type(exc), exc, exc.__traceback__))
    else:
        logger.warning("Error occurred: %s", details, exc_info=(type(exc), exc, exc.__traceback__))


def error_response(request: Request, exc: Exception, status_code: int, message: str) -> JSONResponse:
    _log_error(request, exc, status_code)

    error = {"message": message}
    if request.app.state.settings.is_development:
        error["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(loc) for loc in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return ", ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(request, exc, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = f"Validation failed: {_describe_validation_errors(exc)}"
        return error_response(request, exc, status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # the router raises 404/405 when no route matches method + path
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return error_response(
                request, exc, status.HTTP_404_NOT_FOUND, f"Route {original_url(request)} not found"
            )
        return error_response(request, exc, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return error_response(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
