"""One reconciliation pass: fetch, parse, pick collaborators, reconcile."""

from collections.abc import Awaitable, Callable

import httpx

from announcer.core.config import AppConfig
from announcer.core.errors import (
    ConfigurationError,
    FeedFetchError,
    FeedParseError,
    FeedUnavailableError,
)
from announcer.core.logging import get_logger
from announcer.feed.fetcher import fetch_feed
from announcer.feed.parser import parse_feed
from announcer.reconciler.metrics import RECONCILER_PASSES
from announcer.reconciler.reconciler import Reconciler, ReconcileReport
from announcer.sink.base import NotificationSink
from announcer.sink.logging_sink import LoggingSink
from announcer.sink.slack import SlackSink
from announcer.store.base import StateStore
from announcer.store.memory import InMemoryStore
from announcer.store.redis_store import RedisStore

logger = get_logger(__name__)

StoreFactory = Callable[[AppConfig], Awaitable[StateStore | None]]


async def connect_store(config: AppConfig) -> StateStore | None:
    """Open the persistent store, or None if it is unconfigured or unreachable."""
    if config.store is None:
        logger.warning("store_not_configured")
        return None
    store = await RedisStore.connect(config.store, timeout=config.timeouts.store)
    if store is None:
        logger.error("store_unavailable_previewing_only")
    return store


async def select_collaborators(
    config: AppConfig,
    client: httpx.AsyncClient,
    memory_store: InMemoryStore | None = None,
    store_factory: StoreFactory | None = None,
) -> tuple[StateStore | None, NotificationSink]:
    """Pick the store and sink for this pass.

    Dry-run uses an in-memory store and a logging sink. Normal mode uses
    Redis and Slack; when Redis cannot be reached the store is None and
    the pass only previews entries.

    Args:
        config: Application configuration
        client: Shared HTTP client for the Slack sink
        memory_store: Process-wide store to reuse in dry-run mode
        store_factory: Override for opening the persistent store

    Returns:
        Store (or None) and sink
    """
    if config.mode.is_dry_run:
        if memory_store is None:
            memory_store = InMemoryStore()
        return memory_store, LoggingSink()

    try:
        sink_config = config.sink_config()
    except ConfigurationError as e:
        # Without a sink nothing can be posted; skip every entry
        logger.error("sink_not_configured_previewing_only", error=str(e))
        return None, LoggingSink()

    sink = SlackSink(client, sink_config, timeout=config.timeouts.sink)
    store = await (store_factory or connect_store)(config)
    return store, sink


async def run_reconciliation(
    config: AppConfig,
    client: httpx.AsyncClient,
    memory_store: InMemoryStore | None = None,
    store_factory: StoreFactory | None = None,
) -> ReconcileReport:
    """Run one full pass.

    Args:
        config: Application configuration
        client: Shared HTTP client for the feed and the Slack API
        memory_store: Process-wide store to reuse in dry-run mode
        store_factory: Override for opening the persistent store

    Returns:
        Summary of the pass

    Raises:
        FeedFetchError: If the feed host could not be reached
        FeedUnavailableError: If the feed host answered a non-success status
        FeedParseError: If the feed could not be parsed
    """
    logger.info("reconcile_triggered", mode=config.mode.value)
    try:
        raw = await fetch_feed(client, config.feed.url, timeout=config.timeouts.feed)
    except (FeedFetchError, FeedUnavailableError):
        RECONCILER_PASSES.labels(status="feed_error").inc()
        raise

    try:
        feed = parse_feed(raw)
    except FeedParseError:
        RECONCILER_PASSES.labels(status="parse_error").inc()
        raise

    store, sink = await select_collaborators(
        config, client, memory_store=memory_store, store_factory=store_factory
    )
    reconciler = Reconciler(
        store,
        sink,
        store_write_retries=config.store_write_retries,
        store_retry_delay=config.store_retry_delay,
    )
    try:
        report = await reconciler.reconcile(feed)
    finally:
        if store is not None and store is not memory_store:
            await store.close()

    RECONCILER_PASSES.labels(status="ok").inc()
    return report
