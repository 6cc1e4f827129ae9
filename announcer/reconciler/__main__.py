"""Run a single reconciliation pass from the command line."""

import argparse
import asyncio
import sys

import httpx

from announcer.core.config import AppConfig, Settings, build_config
from announcer.core.errors import AnnouncerError
from announcer.core.logging import configure_logging, get_logger
from announcer.reconciler.runner import run_reconciliation

logger = get_logger(__name__)


async def run_once(config: AppConfig) -> int:
    """Run one pass and map the result to an exit code."""
    async with httpx.AsyncClient() as client:
        try:
            report = await run_reconciliation(config, client)
        except AnnouncerError as e:
            logger.error(
                "reconcile_pass_failed", error_type=e.__class__.__name__, error=str(e)
            )
            return 1
    logger.info("reconcile_pass_complete", **report.to_dict())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Post new and changed feed entries to Slack once, then exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log messages instead of posting them, keep no state",
    )
    parser.add_argument("--feed-url", help="Override the feed URL")
    args = parser.parse_args(argv)

    overrides: dict[str, object] = {}
    if args.dry_run:
        overrides["DRY_RUN"] = True
    if args.feed_url:
        overrides["FEED_URL"] = args.feed_url
    settings = Settings(**overrides)  # type: ignore[arg-type]
    configure_logging(
        level=settings.LOG_LEVEL,
        json_logs=settings.JSON_LOGS,
        testing=settings.TESTING,
    )

    try:
        config = build_config(settings)
    except AnnouncerError as e:
        logger.error("configuration_invalid", error=str(e))
        return 2

    return asyncio.run(run_once(config))


if __name__ == "__main__":
    sys.exit(main())
