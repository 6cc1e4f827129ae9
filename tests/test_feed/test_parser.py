"""Tests for feed parsing."""

import pytest

from announcer.core.errors import FeedParseError
from announcer.feed.parser import parse_feed
from announcer.reconciler.utils import fingerprint
from tests.fixtures.feeds import make_item, make_rss


def test_parses_rss_items_in_order() -> None:
    raw = make_rss(
        make_item(title="First", link="https://example.com/log#first"),
        make_item(title="Second", link="https://example.com/log#second"),
        title="nais log",
    )

    feed = parse_feed(raw)

    assert feed.title == "nais log"
    assert [entry.title for entry in feed.entries] == ["First", "Second"]
    assert [entry.link for entry in feed.entries] == [
        "https://example.com/log#first",
        "https://example.com/log#second",
    ]


def test_reads_encoded_content_and_pub_date(single_entry_feed: bytes) -> None:
    entry = parse_feed(single_entry_feed).entries[0]

    assert entry.content == "Hello [world](https://example.com)"
    assert entry.published_at == "Mon, 01 Jan 2024 09:00:00 GMT"


def test_accepts_text_input(single_entry_feed: bytes) -> None:
    feed = parse_feed(single_entry_feed.decode("utf-8"))
    assert len(feed.entries) == 1


def test_falls_back_to_description() -> None:
    raw = make_rss(
        "<item><title>Plain</title><link>https://example.com/#plain</link>"
        "<description>Only a description</description></item>"
    )

    entry = parse_feed(raw).entries[0]

    assert entry.content == "Only a description"
    assert entry.published_at == ""


def test_parses_atom_feed() -> None:
    raw = (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<feed xmlns="http://www.w3.org/2005/Atom">'
        "<title>Atom log</title>"
        "<id>urn:example:log</id>"
        "<updated>2024-01-01T09:00:00Z</updated>"
        "<entry>"
        "<title>Atom entry</title>"
        '<link href="https://example.com/log#atom-1"/>'
        "<id>urn:example:atom-1</id>"
        "<updated>2024-01-01T09:00:00Z</updated>"
        '<content type="text">Body text</content>'
        "</entry>"
        "</feed>"
    ).encode("utf-8")

    feed = parse_feed(raw)

    assert feed.title == "Atom log"
    assert feed.entries[0].link == "https://example.com/log#atom-1"
    assert feed.entries[0].content == "Body text"


def test_empty_channel_is_a_valid_feed() -> None:
    feed = parse_feed(make_rss())
    assert feed.entries == []


@pytest.mark.parametrize(
    "raw",
    [b"", b"this is not xml at all", b"<html><body>Oops</body></html>"],
)
def test_rejects_documents_that_are_not_feeds(raw: bytes) -> None:
    with pytest.raises(FeedParseError):
        parse_feed(raw)


def test_body_is_kept_as_published() -> None:
    body = "Hi [x](https://e.com/?a=1&b=2) <script>bad()</script> <b>ok</b>"
    raw = make_rss(make_item(content=body))

    entry = parse_feed(raw).entries[0]

    assert entry.content == body
    assert fingerprint(entry.title, entry.content) == fingerprint("Test Post", body)


def test_relative_links_are_not_resolved() -> None:
    body = 'See <a href="/log/older">older</a> and [docs](/docs)'
    raw = make_rss(make_item(content=body))

    assert parse_feed(raw).entries[0].content == body
