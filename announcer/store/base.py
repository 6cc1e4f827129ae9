"""Base classes and types for state stores."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from announcer.core.errors import RecordParseError


class ArchiveRecord(BaseModel):
    """What was last posted for one entry key.

    Serialised as ``{"hash": ..., "timestamp": ...}``; ``timestamp`` is the
    Slack message ``ts`` used to target edits.
    """

    model_config = ConfigDict(populate_by_name=True)

    hash: str
    message_handle: str = Field(alias="timestamp")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "ArchiveRecord":
        """Load a record written by ``to_json``.

        Raises:
            RecordParseError: If the stored value is not a valid record
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise RecordParseError(f"Corrupt archive record: {e}") from e


class StateStore(ABC):
    """Key/value capability used by the reconciler.

    Both ``get`` and ``set`` raise ``StoreError`` on transport failure.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get the stored value for ``key``, or None if never seen."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Upsert the value for ``key``; last write wins."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release any underlying connection."""
