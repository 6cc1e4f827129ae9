"""Redis (Valkey) backed state store."""

from redis.asyncio import Redis
from redis.exceptions import RedisError

from announcer.core.config import StoreConfig
from announcer.core.errors import StoreError
from announcer.core.logging import get_logger
from announcer.store.base import StateStore

logger = get_logger(__name__)


class RedisStore(StateStore):
    """Persistent store over one Redis connection.

    The connection is owned by this instance; do not share it between
    concurrent passes.
    """

    def __init__(self, client: "Redis") -> None:
        self.client = client

    @classmethod
    async def connect(cls, config: StoreConfig, timeout: float) -> "RedisStore | None":
        """Open and verify a connection.

        Args:
            config: Store configuration carrying the connection URI
            timeout: Socket connect/read deadline in seconds

        Returns:
            Connected store, or None if Redis could not be reached
        """
        try:
            client = Redis.from_url(
                config.uri,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=timeout,
                socket_connect_timeout=timeout,
            )
        except (RedisError, ValueError) as e:
            logger.error("redis_client_creation_failed", error=str(e))
            return None

        try:
            await client.ping()
        except (RedisError, OSError) as e:
            logger.error("redis_connection_failed", error=str(e))
            await client.aclose()
            return None

        return cls(client)

    async def get(self, key: str) -> str | None:
        try:
            value = await self.client.get(key)
        except (RedisError, OSError) as e:
            raise StoreError(f"Failed getting {key} from Redis: {e}") from e
        if value is None:
            return None
        return str(value)

    async def set(self, key: str, value: str) -> None:
        try:
            await self.client.set(key, value)
        except (RedisError, OSError) as e:
            raise StoreError(f"Failed saving {key} to Redis: {e}") from e

    async def close(self) -> None:
        await self.client.aclose()
