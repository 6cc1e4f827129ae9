"""Data models for parsed feeds."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Entry:
    """One item of the feed.

    ``published_at`` is kept as the raw text of the feed and is only used
    for logging.
    """

    title: str
    link: str
    published_at: str
    content: str


@dataclass(frozen=True)
class Feed:
    """A parsed feed document, rebuilt on every pass."""

    title: str
    entries: list[Entry] = field(default_factory=list)
