"""
FastAPI middleware for request correlation ID tracking.

Every analytics request gets an X-Correlation-ID: the caller's value when
supplied, otherwise a fresh UUID. The ID is stored on request.state, added
to the logging context for the duration of the request, and echoed back in
the response headers so dashboard errors can be traced to server logs.
"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import set_correlation_id, clear_correlation_id, get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add correlation ID tracking to all requests.

    Usage:
        app.add_middleware(CorrelationIdMiddleware)

    Access in endpoints:
        correlation_id = request.state.correlation_id
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        token = set_correlation_id(correlation_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id

            logger.debug(
                f"Request completed: {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )

            return response
        finally:
            clear_correlation_id(token)
