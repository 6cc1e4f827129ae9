"""Turn raw feed bytes into a Feed."""

from typing import Any

import feedparser

from announcer.core.errors import FeedParseError
from announcer.core.logging import get_logger
from announcer.feed.models import Entry, Feed

logger = get_logger(__name__)


def _entry_body(item: Any) -> str:
    """Get the body of a feed item.

    RSS ``content:encoded`` and Atom ``content`` both land in ``content``;
    plain RSS items only carry ``description``, which feedparser exposes as
    ``summary``.
    """
    contents = item.get("content") or []
    if contents:
        return str(contents[0].get("value", ""))
    return str(item.get("summary", ""))


def _parse_entry(item: Any) -> Entry:
    return Entry(
        title=str(item.get("title", "")),
        link=str(item.get("link", "")),
        published_at=str(item.get("published", "")),
        content=_entry_body(item),
    )


def parse_feed(raw: bytes | str) -> Feed:
    """Parse an RSS or Atom document.

    Args:
        raw: Feed document as fetched

    Returns:
        Parsed feed with entries in document order

    Raises:
        FeedParseError: If the document is not a feed, or is malformed and
            nothing could be recovered from it
    """
    # Bodies are hashed and posted as published; no sanitizing or URI rewriting
    parsed = feedparser.parse(raw, sanitize_html=False, resolve_relative_uris=False)

    if not parsed.get("version"):
        reason = parsed.get("bozo_exception", "unrecognised document")
        raise FeedParseError(f"Document is not an RSS or Atom feed: {reason}")

    if parsed.get("bozo") and not parsed.entries:
        raise FeedParseError(f"Malformed feed: {parsed.get('bozo_exception')}")

    if parsed.get("bozo"):
        logger.warning(
            "feed_recovered_from_malformed_document",
            error=str(parsed.get("bozo_exception")),
        )

    feed = Feed(
        title=str(parsed.feed.get("title", "")),
        entries=[_parse_entry(item) for item in parsed.entries],
    )
    logger.info("feed_parsed", title=feed.title, entries=len(feed.entries))
    return feed
