"""Feed fetching and parsing."""

from announcer.feed.fetcher import fetch_feed
from announcer.feed.models import Entry, Feed
from announcer.feed.parser import parse_feed

__all__ = ["Entry", "Feed", "fetch_feed", "parse_feed"]
