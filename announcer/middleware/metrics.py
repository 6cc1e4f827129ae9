"""Request metrics middleware for Prometheus monitoring."""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from announcer.core.events import REQUESTS_TOTAL, RESPONSES_TOTAL
from announcer.core.logging import get_logger

logger = get_logger(__name__)

# Probes hit these every few seconds; counting them is enough
QUIET_PATHS = frozenset({"/isalive", "/isready", "/metrics"})


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect request/response metrics.

    Records:
    - Total requests by method and path
    - Total responses by status code
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle and record metrics.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers
        """
        path = str(request.url.path).rstrip("/") or "/"
        REQUESTS_TOTAL.labels(method=request.method, path=path).inc()

        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        RESPONSES_TOTAL.labels(status_code=str(response.status_code)).inc()

        if path not in QUIET_PATHS:
            logger.info(
                "request_processed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration=duration,
            )

        return response
