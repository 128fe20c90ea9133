# app/middleware.py
"""
Request pipeline pieces that sit around the route handlers.

- ``RequestLoggingMiddleware``: ASGI middleware logging every request as it
  arrives and again once its response body has been sent.
- ``require_api_key``: dependency gating the mutating routes.
- ``async_wrapper``: decorator that routes unexpected handler failures to
  the registered error handlers.
"""

import functools
import hmac
import inspect
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from fastapi import Header, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import AppError, AuthenticationError, InternalServerError

logger = logging.getLogger(__name__)


def original_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


# ---------------------------
# Request logging
# ---------------------------
class RequestLoggingMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        timestamp = datetime.now(timezone.utc).isoformat()
        method = request.method
        url = original_url(request)
        client_ip = request.client.host if request.client else "unknown"
        user_agent = request.headers.get("user-agent", "Unknown")

        logger.info("[%s] %s %s - IP: %s - User-Agent: %s", timestamp, method, url, client_ip, user_agent)
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)
            if message["type"] == "http.response.body" and not message.get("more_body", False):
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.info("[%s] %s %s - %d - %dms", timestamp, method, url, status_code, elapsed_ms)

        await self.app(scope, receive, send_wrapper)


# ---------------------------
# Authentication
# ---------------------------
async def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
) -> None:
    api_key = x_api_key or authorization
    if not api_key:
        raise AuthenticationError(
            "API key is required. Please provide it in the x-api-key header or Authorization header."
        )

    key = api_key[len("Bearer "):] if api_key.startswith("Bearer ") else api_key
    expected = request.app.state.settings.api_key
    if not hmac.compare_digest(key.encode("utf-8"), expected.encode("utf-8")):
        raise AuthenticationError("Invalid API key provided.")

    request.state.authenticated = True


# ---------------------------
# Async error capture
# ---------------------------
def async_wrapper(handler: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a route handler so any untyped failure becomes an InternalServerError.

    The wrapper keeps the handler's signature (FastAPI reads it through
    ``__wrapped__``) and returns its result untouched.  ``AppError`` and HTTP
    exceptions pass through as they are; anything else is chained into an
    ``InternalServerError`` so the app's exception handlers render it instead
    of the server's last-resort error page.
    """

    @functools.wraps(handler)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            result = handler(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result
        except (AppError, StarletteHTTPException):
            raise
        except Exception as exc:
            raise InternalServerError() from exc

    return wrapper
