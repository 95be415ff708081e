"""Manual cleanup script: delete a repository left behind by a failed publish.

A failed publish leaves the repository it created on GitHub. Publishing only
deletes it automatically when DELETE_REPOSITORY_ON_FAILURE=true (and that
cleanup request succeeds). Run this for the leftovers.

Usage:
    python -m scripts.delete_repository <repository-name> [--yes]

The token needs the `delete_repo` scope.
"""

from __future__ import annotations

import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def delete_repository(name: str) -> int:
    """Delete `name` from the configured account after confirmation."""
    from repo_publisher.config.settings import settings
    from repo_publisher.services.github import GitHubService, PublishError, close_github_client

    if not settings.github_configured:
        logger.error("GITHUB_TOKEN and GITHUB_OWNER must be set")
        return 2

    full_name = f"{settings.github_owner}/{name}"

    # Confirm
    if "--yes" not in sys.argv:
        confirm = input(f"\nPermanently delete {full_name}? [y/N] ")
        if confirm.lower() != "y":
            logger.info("Aborted.")
            return 0

    service = GitHubService(settings.github_token)
    try:
        await service.delete_repository(settings.github_owner, name)
    except PublishError as e:
        logger.error(f"Failed to delete {full_name}: {e.message}")
        return 1
    finally:
        await close_github_client()

    logger.info(f"Deleted {full_name}.")
    return 0


if __name__ == "__main__":
    names = [arg for arg in sys.argv[1:] if not arg.startswith("--")]
    if len(names) != 1:
        print("Usage: python -m scripts.delete_repository <repository-name> [--yes]")
        sys.exit(2)
    sys.exit(asyncio.run(delete_repository(names[0])))
