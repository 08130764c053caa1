"""Request context middleware using ContextVar.

Takes the request id from the X-Request-ID header (or generates one) and
stores it in a ContextVar so that downstream code can call get_request_id()
without explicit parameter passing. The id is bound to every loguru record
emitted while the request is handled and echoed back in the response.
"""

import time
import uuid
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import PlainTextResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# ---------------------------------------------------------------------------
# Context variable: per-request state
# ---------------------------------------------------------------------------

_current_request_id: ContextVar[str] = ContextVar("current_request_id", default="-")


def get_request_id() -> str:
    """Return the id of the request being handled, or "-" outside one."""
    return _current_request_id.get()


# ---------------------------------------------------------------------------
# Error response
# ---------------------------------------------------------------------------

def server_error(request: Request, exc: Exception) -> Response:
    """Log an unhandled failure and answer with a generic 500."""
    logger.opt(exception=exc).error(
        "Unhandled error on {} {}", request.method, request.url.path
    )
    return PlainTextResponse("Internal Server Error", status_code=500)


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id and log one line per request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = _current_request_id.set(request_id)
        started = time.perf_counter()
        try:
            with logger.contextualize(request_id=request_id):
                try:
                    response = await call_next(request)
                except Exception as exc:
                    response = server_error(request, exc)
                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.info(
                    "{} {} -> {} ({:.1f} ms)",
                    request.method,
                    request.url.path,
                    response.status_code,
                    elapsed_ms,
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _current_request_id.reset(token)

