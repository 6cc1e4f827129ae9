"""Render feed entries as Slack mrkdwn."""

import re

from announcer.feed.models import Entry

MARKDOWN_LINK = re.compile(r"\[(.*?)\]\((.*?)\)")


def format_links(text: str) -> str:
    """Rewrite markdown links ``[text](url)`` to Slack's ``<url|text>``."""
    return MARKDOWN_LINK.sub(r"<\2|\1>", text)


def render_entry(entry: Entry) -> str:
    """Render an entry as a linked title line followed by the body."""
    return f"<{entry.link}|{entry.title}>\n{format_links(entry.content)}"
