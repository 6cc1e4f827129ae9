"""Feed download."""

import httpx

from announcer.core.errors import FeedFetchError, FeedUnavailableError
from announcer.core.logging import get_logger

logger = get_logger(__name__)


async def fetch_feed(client: httpx.AsyncClient, url: str, timeout: float) -> bytes:
    """Download the feed document.

    Args:
        client: Shared HTTP client
        url: Feed URL
        timeout: Deadline for this single request, in seconds

    Returns:
        Raw response body

    Raises:
        FeedFetchError: If the host could not be reached in time
        FeedUnavailableError: If the host answered with a non-success status
    """
    logger.info("fetching_feed", url=url)
    try:
        response = await client.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        raise FeedFetchError(f"Failed getting the feed from {url}: {e}") from e

    if not response.is_success:
        raise FeedUnavailableError(response.status_code)

    return response.content
