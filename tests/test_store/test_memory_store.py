"""Tests for the in-memory store and archive records."""

import json

import pytest

from announcer.core.errors import RecordParseError
from announcer.store.base import ArchiveRecord
from announcer.store.memory import InMemoryStore


@pytest.mark.asyncio
async def test_get_unknown_key_returns_none() -> None:
    store = InMemoryStore()
    assert await store.get("post-1") is None


@pytest.mark.asyncio
async def test_set_overwrites_previous_value() -> None:
    store = InMemoryStore()
    await store.set("post-1", "first")
    await store.set("post-1", "second")

    assert await store.get("post-1") == "second"


@pytest.mark.asyncio
async def test_initial_values_are_copied() -> None:
    initial = {"post-1": "value"}
    store = InMemoryStore(initial)
    await store.set("post-2", "other")

    assert await store.get("post-1") == "value"
    assert "post-2" not in initial


@pytest.mark.asyncio
async def test_repeated_writes_keep_only_latest_state() -> None:
    store = InMemoryStore()
    for n in range(100):
        await store.set("post-1", str(n))

    assert vars(store) == {"data": {"post-1": "99"}}

class TestArchiveRecord:
    def test_serialises_handle_as_timestamp(self) -> None:
        record = ArchiveRecord(hash="abc", message_handle="1700000000.000001")
        assert json.loads(record.to_json()) == {
            "hash": "abc",
            "timestamp": "1700000000.000001",
        }

    def test_reads_stored_format(self) -> None:
        record = ArchiveRecord.from_json('{"hash": "abc", "timestamp": "123.4"}')
        assert record.hash == "abc"
        assert record.message_handle == "123.4"

    @pytest.mark.parametrize(
        "raw", ["not json", "{}", '{"hash": "abc"}', '["abc", "123"]']
    )
    def test_corrupt_record_raises(self, raw: str) -> None:
        with pytest.raises(RecordParseError):
            ArchiveRecord.from_json(raw)
