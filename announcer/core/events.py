"""Application startup and shutdown events."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from prometheus_client import Counter

from announcer.core.config import AppConfig, Settings, build_config
from announcer.core.logging import configure_logging, get_logger
from announcer.reconciler.runner import StoreFactory
from announcer.store.memory import InMemoryStore

# Prometheus metrics
REQUESTS_TOTAL = Counter(
    "announcer_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path"],
)

RESPONSES_TOTAL = Counter(
    "announcer_http_responses_total",
    "Total number of HTTP responses",
    labelnames=["status_code"],
)

logger = get_logger(__name__)


class AppState:
    """Process-wide collaborators shared by every reconciliation pass."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize state.

        Args:
            config: Validated application configuration
        """
        self.config = config
        self.http_client: httpx.AsyncClient | None = None
        self.memory_store: InMemoryStore | None = None
        self.store_factory: StoreFactory | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self.http_client is None:
            raise RuntimeError("HTTP client used before application startup")
        return self.http_client


def create_start_app_handler(
    app: Any,
    settings: Settings,
    config: AppConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    store_factory: StoreFactory | None = None,
) -> Callable[[], Awaitable[None]]:
    """Create startup event handler.

    Args:
        app: FastAPI application instance
        settings: Settings to build the configuration from
        config: Prebuilt configuration, skips reading settings
        transport: Optional transport for the shared HTTP client
        store_factory: Optional override for opening the persistent store

    Returns:
        Startup handler function
    """

    async def start_app() -> None:
        # Missing secrets raise ConfigurationError here and abort startup
        app_config = config if config is not None else build_config(settings)

        state = AppState(app_config)
        state.http_client = httpx.AsyncClient(
            transport=transport,
            headers={"User-Agent": f"{settings.app_name}/{settings.version}"},
        )
        if app_config.mode.is_dry_run:
            state.memory_store = InMemoryStore()
        state.store_factory = store_factory
        app.state.runtime = state

        logger.info(
            "application_started",
            mode=app_config.mode.value,
            feed_url=app_config.feed.url,
            persistence=app_config.store is not None,
        )

    return start_app


def create_stop_app_handler(app: Any) -> Callable[[], Awaitable[None]]:
    """Create shutdown event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Shutdown handler function
    """

    async def stop_app() -> None:
        state: AppState | None = getattr(app.state, "runtime", None)
        if state is not None and state.http_client is not None:
            logger.info("closing_http_client")
            await state.http_client.aclose()
            state.http_client = None
        logger.info("application_shutdown_complete")

    return stop_app


def create_lifespan(
    settings: Settings,
    config: AppConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    store_factory: StoreFactory | None = None,
) -> Callable[[Any], Any]:
    """Create the lifespan context running the startup and shutdown handlers."""

    @asynccontextmanager
    async def lifespan(app: Any) -> AsyncIterator[None]:
        configure_logging(
            level=settings.LOG_LEVEL,
            json_logs=settings.JSON_LOGS,
            testing=settings.TESTING,
        )
        await create_start_app_handler(
            app, settings, config, transport, store_factory
        )()
        try:
            yield
        finally:
            await create_stop_app_handler(app)()

    return lifespan
