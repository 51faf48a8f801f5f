"""
Correlation ID Middleware
Adds unique request ID for request tracing
"""
from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from agilesync.shared.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    set_correlation_id,
)

logger = get_logger(__name__)

HEADER = "X-Request-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Generates or extracts X-Request-ID, binds it to the logging context and
    request.state, and echoes it on the response along with the duration.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(HEADER))
        request.state.correlation_id = correlation_id
        bind_request_context(
            path=request.url.path,
            method=request.method,
            client_ip=request.client.host if request.client else None,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            response.headers[HEADER] = correlation_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            logger.info("Request completed", status_code=response.status_code, duration_ms=duration_ms)
            return response
        finally:
            clear_request_context()
