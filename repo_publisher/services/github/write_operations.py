"""
GitHub API write operations.

Provides all write operations a publish run performs:
- Creating and deleting repositories
- Creating blobs, trees and commits through the Git Data API
- Moving a branch reference
"""

import base64
import logging
from typing import Any

from repo_publisher.config import settings
from repo_publisher.services.github.base import GitHubOperationsBase
from repo_publisher.services.github.constants import BLOB_ENCODING
from repo_publisher.services.github.helpers import require_field
from repo_publisher.services.github.types import (
    CommitRequest,
    GitCommit,
    GitTree,
    ReferenceUpdate,
    Repository,
    TreeRequest,
)

logger = logging.getLogger(__name__)


class GitHubWriteOperations(GitHubOperationsBase):
    """
    Write operations for GitHub API.

    This class provides all methods for modifying GitHub repository content.
    Uses the Git Data API so a commit can be assembled without a git client.
    """

    def _normalize_repo(self, data: Any) -> Repository:
        """Convert GitHub API response to Repository dataclass."""
        name = require_field(data, "create_repository", "name")
        owner = require_field(data, "create_repository", "owner", "login")
        return Repository(
            name=name,
            owner=owner,
            full_name=data.get("full_name", f"{owner}/{name}"),
            url=data.get("html_url") or f"{settings.github_web_url.rstrip('/')}/{owner}/{name}",
            default_branch=data.get("default_branch") or settings.default_branch,
            is_private=data.get("private", False),
        )

    async def create_repository(
        self,
        name: str,
        private: bool = False,
        auto_init: bool = True,
        description: str | None = None,
    ) -> Repository:
        """
        Create a repository for the authenticated user.

        Args:
            name: Repository name (must be unique for the account)
            private: Create as private repository
            auto_init: Create an initial commit with an empty README
            description: Optional repository description

        Returns:
            The created Repository
        """
        payload: dict[str, Any] = {"name": name, "private": private, "auto_init": auto_init}
        if description:
            payload["description"] = description

        data = await self._call("POST", "/user/repos", "create_repository", name, payload)
        repository = self._normalize_repo(data)
        logger.info(f"Created GitHub repository {repository.full_name}")
        return repository

    async def delete_repository(self, owner: str, repo: str) -> None:
        """
        Delete a repository. Requires the `delete_repo` scope.

        Args:
            owner: Repository owner
            repo: Repository name
        """
        await self._call(
            "DELETE",
            f"/repos/{owner}/{repo}",
            "delete_repository",
            f"{owner}/{repo}",
            expect_body=False,
        )
        logger.info(f"Deleted GitHub repository {owner}/{repo}")

    async def create_blob(self, owner: str, repo: str, content: bytes) -> str:
        """
        Create a blob from raw bytes.

        Blobs are content addressed: identical bytes always yield the same SHA.

        Args:
            owner: Repository owner
            repo: Repository name
            content: Raw file content

        Returns:
            The blob SHA
        """
        data = await self._call(
            "POST",
            f"/repos/{owner}/{repo}/git/blobs",
            "create_blob",
            f"{owner}/{repo}",
            {
                "content": base64.b64encode(content).decode("ascii"),
                "encoding": BLOB_ENCODING,
            },
        )
        sha: str = require_field(data, "create_blob", "sha")
        return sha

    async def create_tree(self, owner: str, repo: str, request: TreeRequest) -> GitTree:
        """
        Create a tree on top of `request.base_tree`.

        Args:
            owner: Repository owner
            repo: Repository name
            request: Base tree SHA plus the entries to add or replace

        Returns:
            The new GitTree
        """
        data = await self._call(
            "POST",
            f"/repos/{owner}/{repo}/git/trees",
            "create_tree",
            f"{owner}/{repo}",
            request.to_payload(),
        )
        return self._normalize_tree(data, "create_tree")

    async def create_commit(self, owner: str, repo: str, request: CommitRequest) -> GitCommit:
        """
        Create a commit object. Does not move any branch.

        Args:
            owner: Repository owner
            repo: Repository name
            request: Message, tree SHA, parent SHAs and author

        Returns:
            The new GitCommit
        """
        data = await self._call(
            "POST",
            f"/repos/{owner}/{repo}/git/commits",
            "create_commit",
            f"{owner}/{repo}",
            request.to_payload(),
        )
        return self._normalize_commit(data, "create_commit")

    async def update_reference(
        self,
        owner: str,
        repo: str,
        branch: str,
        update: ReferenceUpdate,
    ) -> str:
        """
        Point a branch at a commit.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Branch name, without the refs/heads/ prefix
            update: Target SHA and whether to force a non-fast-forward update

        Returns:
            The SHA the reference now points to
        """
        data = await self._call(
            "PATCH",
            f"/repos/{owner}/{repo}/git/refs/heads/{branch}",
            "update_reference",
            f"{owner}/{repo}",
            update.to_payload(),
        )
        sha: str = require_field(data, "update_reference", "object", "sha")
        return sha
