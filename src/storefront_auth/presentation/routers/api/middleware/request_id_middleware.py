"""Request ID middleware.

- Reuses the client's ``x-request-id`` header, or generates
  ``req_<epoch-ms>_<7 base36 chars>``
- Stores it on ``request.state.request_id`` for error envelopes
- Binds it into structlog contextvars so every log line carries it
- Adds X-Request-Id response header
"""

from __future__ import annotations

import secrets
import string
import time
from contextvars import ContextVar
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"

_BASE36 = string.digits + string.ascii_lowercase

request_id_context: ContextVar[str | None] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """Return a new request id, e.g. ``req_1767268800000_k3x9q2a``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"req_{int(time.time() * 1000)}_{suffix}"


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return request_id_context.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that assigns a request ID to each request."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        request.state.request_id = request_id
        token = request_id_context.set(request_id)
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            # Clear context after request to prevent leakage
            structlog.contextvars.unbind_contextvars("request_id")
            request_id_context.reset(token)
