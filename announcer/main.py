"""Main FastAPI application module."""

import httpx
from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException

from announcer.api.router import router
from announcer.core.config import AppConfig, Settings
from announcer.core.config import settings as default_settings
from announcer.core.events import create_lifespan
from announcer.middleware.correlation import CorrelationMiddleware
from announcer.middleware.errors import ErrorHandlingMiddleware, http_exception_handler
from announcer.middleware.metrics import MetricsMiddleware
from announcer.reconciler.runner import StoreFactory


def create_app(
    settings: Settings | None = None,
    config: AppConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    store_factory: StoreFactory | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-loaded ones
        config: Prebuilt configuration, skips validating settings at startup
        transport: Transport for the shared outbound HTTP client
        store_factory: Override for opening the persistent store

    Returns:
        Configured application
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        description="Posts new and changed feed entries to Slack",
        version=settings.version,
        default_response_class=JSONResponse,
        lifespan=create_lifespan(settings, config, transport, store_factory),
    )

    # Add middleware in order (inside -> out):
    # 1. Correlation (outermost - adds request ID)
    # 2. Metrics (tracks all requests)
    # 3. Error handling (innermost - handles all errors)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose Prometheus metrics."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/", include_in_schema=False, response_class=PlainTextResponse)
    async def root() -> str:
        """Static informational message."""
        return settings.ROOT_MESSAGE

    app.include_router(router)
    return app


app = create_app()
