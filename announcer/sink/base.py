"""Base class for notification sinks."""

from abc import ABC, abstractmethod

from announcer.feed.models import Entry


class NotificationSink(ABC):
    """Messaging capability used by the reconciler.

    Implementations raise ``SinkError`` when a message could not be
    delivered.
    """

    @abstractmethod
    async def post_message(self, entry: Entry) -> str:
        """Post the entry as a new message.

        Returns:
            Opaque handle of the created message, used to target updates
        """
        raise NotImplementedError

    @abstractmethod
    async def update_message(self, entry: Entry, handle: str) -> None:
        """Replace the content of the message identified by ``handle``."""
        raise NotImplementedError
