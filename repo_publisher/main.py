"""
Command-line entry point.

Usage:
    repo-publisher <directory> <repository-name>

Credentials come from the environment (or .env): GITHUB_TOKEN, GITHUB_OWNER.
"""

import asyncio
import logging
import sys

from repo_publisher.config import settings
from repo_publisher.services.github import PublishError, close_github_client
from repo_publisher.services.publisher import RepositoryPublisher

USAGE = "Usage: repo-publisher <directory> <repository-name>"


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


async def run(directory: str, name: str) -> str:
    """Publish `directory` as repository `name` and return its URL."""
    publisher = RepositoryPublisher.from_settings()
    try:
        return await publisher.publish(directory, name)
    finally:
        await close_github_client()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print(USAGE, file=sys.stderr)
        return 2

    setup_logging()
    if not settings.github_configured:
        logger.error("GITHUB_TOKEN and GITHUB_OWNER must be set")
        return 2

    directory, name = args
    try:
        url = asyncio.run(run(directory, name))
    except PublishError as e:
        logger.error(f"Publishing {directory} failed at stage {e.stage}: {e.message}")
        return 1

    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
