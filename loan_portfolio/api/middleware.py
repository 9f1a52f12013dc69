"""FastAPI middleware for request tracing, access logging and metrics"""

import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from loan_portfolio.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"

# Scrapes and probes are not traffic worth timing
UNTIMED_PATHS = frozenset({"/metrics", "/health"})


def _route_template(request: Request) -> str:
    """/v1/loans/{loan_id} rather than the concrete path, to bound label cardinality"""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an ID and write one access log line for it.

    A caller-supplied X-Request-ID is reused so IDs can be followed across
    services; otherwise a fresh UUID is generated. The ID is echoed back on
    the response and exposed to endpoints via request.state.request_id.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        logging.info(
            "Request handled",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe request latency per method, route and status"""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNTIMED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=_route_template(request),
            status=response.status_code,
        ).observe(time.perf_counter() - started)
        return response
