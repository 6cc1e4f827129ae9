"""Main reconciler functionality."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from structlog.stdlib import BoundLogger

from announcer.core.errors import (
    AnnouncerError,
    MalformedLink,
    RecordParseError,
    SinkError,
    StoreError,
)
from announcer.core.logging import get_logger
from announcer.feed.models import Entry, Feed
from announcer.reconciler.metrics import RECONCILER_ENTRIES
from announcer.reconciler.utils import derive_key, fingerprint
from announcer.sink.base import NotificationSink
from announcer.sink.formatting import render_entry
from announcer.store.base import ArchiveRecord, StateStore
from announcer.store.retry import with_store_retry

logger = get_logger(__name__)


class EntryOutcome(str, Enum):
    """What happened to one entry during a pass."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    PREVIEWED = "previewed"
    FAILED = "failed"


@dataclass
class ReconcileReport:
    """Summary of one reconciliation pass."""

    feed_title: str
    counts: dict[EntryOutcome, int] = field(
        default_factory=lambda: {outcome: 0 for outcome in EntryOutcome}
    )

    def record(self, outcome: EntryOutcome) -> None:
        self.counts[outcome] += 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "feed": self.feed_title,
            "entries": self.total,
            **{outcome.value: count for outcome, count in self.counts.items()},
        }


class Reconciler:
    """Turns feed entries into post/update calls against a sink.

    Entries are handled one at a time, in feed order. A failure on one
    entry is logged and never aborts the rest of the pass. The store only
    ever records content that reached the sink.
    """

    def __init__(
        self,
        store: StateStore | None,
        sink: NotificationSink,
        store_write_retries: int = 0,
        store_retry_delay: float = 0.5,
    ) -> None:
        """Initialize reconciler.

        Args:
            store: State store, or None to only preview entries
            sink: Where new and changed entries are sent
            store_write_retries: Extra attempts for a store write that
                follows a successful sink call
            store_retry_delay: Initial delay between those attempts
        """
        self.store = store
        self.sink = sink
        self.store_write_retries = store_write_retries
        self.store_retry_delay = store_retry_delay

    async def reconcile(self, feed: Feed) -> ReconcileReport:
        """Reconcile every entry of a parsed feed.

        Args:
            feed: Parsed feed

        Returns:
            Per-outcome counts for the pass
        """
        logger.info(
            "reconcile_started",
            feed=feed.title,
            entries=len(feed.entries),
            persistence=self.store is not None,
        )
        report = ReconcileReport(feed_title=feed.title)
        for entry in feed.entries:
            outcome = await self.reconcile_entry(entry)
            report.record(outcome)
            RECONCILER_ENTRIES.labels(outcome=outcome.value).inc()

        logger.info("reconcile_finished", **report.to_dict())
        return report

    async def reconcile_entry(self, entry: Entry) -> EntryOutcome:
        """Decide create, update or skip for one entry and carry it out."""
        entry_logger = logger.bind(title=entry.title, published_at=entry.published_at)

        try:
            key = derive_key(entry.link)
        except MalformedLink as e:
            entry_logger.error("entry_malformed_link", link=entry.link, error=str(e))
            return EntryOutcome.FAILED

        entry_logger = entry_logger.bind(key=key)
        entry_logger.info("entry_handling")
        digest = fingerprint(entry.title, entry.content)

        store = self.store
        if store is None:
            entry_logger.info("entry_preview", text=render_entry(entry))
            return EntryOutcome.PREVIEWED

        try:
            raw = await store.get(key)
        except StoreError as e:
            entry_logger.error("store_read_failed", error=str(e))
            return EntryOutcome.FAILED

        try:
            if raw is None:
                return await self._create(store, entry, key, digest, entry_logger)

            record = ArchiveRecord.from_json(raw)
            if record.hash == digest:
                entry_logger.info("entry_unchanged")
                return EntryOutcome.UNCHANGED

            return await self._update(store, entry, key, digest, record, entry_logger)
        except RecordParseError as e:
            entry_logger.error("stored_record_corrupt", error=str(e))
            return EntryOutcome.FAILED
        except AnnouncerError as e:
            entry_logger.error(
                "entry_failed", error_type=e.__class__.__name__, error=str(e)
            )
            return EntryOutcome.FAILED

    async def _create(
        self,
        store: StateStore,
        entry: Entry,
        key: str,
        digest: str,
        entry_logger: BoundLogger,
    ) -> EntryOutcome:
        entry_logger.info("entry_new")
        try:
            handle = await self.sink.post_message(entry)
        except SinkError as e:
            entry_logger.error("sink_post_failed", reason=e.reason)
            return EntryOutcome.FAILED

        record = ArchiveRecord(hash=digest, message_handle=handle)
        if not await self._record(store, key, record, entry_logger):
            return EntryOutcome.FAILED

        entry_logger.info("entry_posted", handle=handle)
        return EntryOutcome.CREATED

    async def _update(
        self,
        store: StateStore,
        entry: Entry,
        key: str,
        digest: str,
        record: ArchiveRecord,
        entry_logger: BoundLogger,
    ) -> EntryOutcome:
        entry_logger.info("entry_changed", handle=record.message_handle)
        try:
            await self.sink.update_message(entry, record.message_handle)
        except SinkError as e:
            entry_logger.error("sink_update_failed", reason=e.reason)
            return EntryOutcome.FAILED

        updated = record.model_copy(update={"hash": digest})
        if not await self._record(store, key, updated, entry_logger):
            return EntryOutcome.FAILED

        entry_logger.info("entry_updated", handle=record.message_handle)
        return EntryOutcome.UPDATED

    async def _record(
        self,
        store: StateStore,
        key: str,
        record: ArchiveRecord,
        entry_logger: BoundLogger,
    ) -> bool:
        """Persist a record after a successful sink call.

        A failure here means the sink saw the message but the store did
        not; the next pass repeats the sink call.
        """
        save = with_store_retry(
            max_retries=self.store_write_retries, base_delay=self.store_retry_delay
        )(store.set)
        try:
            await save(key, record.to_json())
        except StoreError as e:
            entry_logger.error("store_write_failed", error=str(e))
            return False
        return True
