"""Request/response logging middleware with timing and request metrics."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.metrics import record_http_request
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _endpoint_label(request: Request) -> str:
    """
    Route template for metric labels so user ids do not explode cardinality.

    Depending on the routing version, an included router's prefix may be
    missing from ``route.path``; it is recovered from the request path.
    """
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    if not template:
        return request.url.path
    depth = template.count("/")
    prefix = "/".join(request.url.path.split("/")[:-depth])
    return prefix + template


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration."""

    EXCLUDED_PATHS = ("/metrics",)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(
            request_id=get_request_id(),
            method=method,
            path=path,
        )

        log.info("request_started", query=query)

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, _endpoint_label(request), response.status_code, duration)

            return response

        except Exception as e:
            duration = time.perf_counter() - start_time

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, _endpoint_label(request), 500, duration)
            raise
