"""Request context middleware: correlation id, latency metric and access log"""

import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from riskscore_gateway.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"
UNMATCHED_ROUTE = "unmatched"


def route_template(request: Request) -> str:
    """Path template of the matched route, so metric labels stay bounded"""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Per-request bookkeeping around every endpoint.

    - Reuses the caller's X-Request-ID or mints one, echoed on the response
    - Observes latency labelled by method, route template and status
    - Emits one structured access log line
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        endpoint = route_template(request)
        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(elapsed)
        logging.info(
            "Request handled",
            extra={
                "request_id": request_id,
                "method": request.method,
                "endpoint": endpoint,
                "status_code": response.status_code,
                "duration_ms": round(elapsed * 1000, 2),
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
