"""Process-local store used in dry-run mode and tests."""

from announcer.store.base import StateStore


class InMemoryStore(StateStore):
    """Dict-backed store. Never fails."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value
