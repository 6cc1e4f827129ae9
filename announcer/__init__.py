"""Announcer: posts new and changed feed entries to a Slack channel."""

__version__ = "0.1.0"
