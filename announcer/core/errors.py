"""Error taxonomy for the announcer service."""

from starlette.status import (
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)


class AnnouncerError(Exception):
    """Base class for all announcer errors.

    ``public_message`` is what an HTTP caller gets to see; the exception
    message itself is only ever logged.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = "Internal server error"


class TransportError(AnnouncerError):
    """A remote collaborator could not be reached."""

    public_message = "Upstream service unreachable"


class FeedFetchError(TransportError):
    """The feed host could not be reached."""

    public_message = "Failed fetching the feed"


class StoreError(TransportError):
    """The state store failed a get or set."""


class SinkError(TransportError):
    """The messaging API rejected or never received a request."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class FeedUnavailableError(AnnouncerError):
    """The feed host answered with a non-success status."""

    status_code = HTTP_503_SERVICE_UNAVAILABLE
    public_message = "Feed is unavailable"

    def __init__(self, upstream_status: int) -> None:
        super().__init__(f"Feed host answered with status {upstream_status}")
        self.upstream_status = upstream_status


class ParseError(AnnouncerError):
    """Malformed input: feed XML or a stored record."""

    public_message = "Failed parsing input"


class FeedParseError(ParseError):
    """The fetched document is not a usable feed."""

    public_message = "Failed parsing the feed"


class RecordParseError(ParseError):
    """A stored archive record is not valid JSON of the expected shape."""


class ConfigurationError(AnnouncerError):
    """Required configuration is missing or invalid."""

    public_message = "Service is misconfigured"


class MalformedLink(AnnouncerError):
    """An entry link carries no usable fragment to key it by."""

    def __init__(self, link: str) -> None:
        super().__init__(f"Link has no fragment identifier: {link!r}")
        self.link = link
