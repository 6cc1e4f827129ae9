"""Retry mechanisms for state store operations."""

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from announcer.core.errors import StoreError
from announcer.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def with_store_retry(
    max_retries: int = 0,
    base_delay: float = 0.5,
    max_delay: float = 5.0,
    backoff_factor: float = 2.0,
    retry_on: tuple[type[Exception], ...] = (StoreError,),
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that adds retry logic with exponential backoff for store calls.

    With ``max_retries=0`` the wrapped call is attempted exactly once.

    Args:
        max_retries: Maximum number of retry attempts
        base_delay: Initial delay between retries in seconds
        max_delay: Maximum delay between retries in seconds
        backoff_factor: Multiplier for exponential backoff
        retry_on: Tuple of exception types to retry on

    Returns:
        Decorated coroutine function with retry logic
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == max_retries:
                        raise

                    delay = min(base_delay * (backoff_factor**attempt), max_delay)
                    logger.warning(
                        "store_operation_retry",
                        attempt=attempt + 1,
                        max_attempts=max_retries + 1,
                        delay=delay,
                        error=str(e),
                    )
                    await asyncio.sleep(delay)

            raise RuntimeError("Unexpected retry loop exit")

        return wrapper

    return decorator
