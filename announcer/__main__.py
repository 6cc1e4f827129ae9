"""Serve the announcer webhook."""

import uvicorn

from announcer.core.config import settings


def main() -> None:
    """Run the HTTP server."""
    uvicorn.run(
        "announcer.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
