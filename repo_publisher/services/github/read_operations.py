"""
GitHub API read operations.

Provides the read-only calls a publish run needs:
- Commits of a freshly initialized repository
- Git Data commit and tree objects
- Email addresses of the authenticated account
"""

import logging

from repo_publisher.services.github.base import GitHubOperationsBase
from repo_publisher.services.github.helpers import require_field, require_object_list
from repo_publisher.services.github.types import (
    CommitSummary,
    GitCommit,
    GitTree,
    UserEmail,
)

logger = logging.getLogger(__name__)


class GitHubReadOperations(GitHubOperationsBase):
    """
    Read-only operations for GitHub API.

    This class provides all methods for fetching data from GitHub repositories
    without modifying them.
    """

    async def list_commits(self, owner: str, repo: str) -> list[CommitSummary]:
        """
        List commits on the default branch.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Commit summaries, newest first
        """
        data = await self._call(
            "GET", f"/repos/{owner}/{repo}/commits", "list_commits", f"{owner}/{repo}"
        )
        summaries = []
        for item in require_object_list(data, "list_commits", "commits"):
            commit = item.get("commit")
            summaries.append(
                CommitSummary(
                    sha=require_field(item, "list_commits", "sha"),
                    message=commit.get("message") if isinstance(commit, dict) else None,
                )
            )
        return summaries

    async def get_commit(self, owner: str, repo: str, sha: str) -> GitCommit:
        """
        Fetch a Git Data commit object.

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Commit SHA

        Returns:
            GitCommit including the SHA of its tree
        """
        data = await self._call(
            "GET", f"/repos/{owner}/{repo}/git/commits/{sha}", "get_commit", f"{owner}/{repo}"
        )
        return self._normalize_commit(data, "get_commit")

    async def get_tree(self, owner: str, repo: str, sha: str) -> GitTree:
        """
        Fetch a Git Data tree object (non-recursive).

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Tree SHA

        Returns:
            GitTree with its direct entries
        """
        data = await self._call(
            "GET", f"/repos/{owner}/{repo}/git/trees/{sha}", "get_tree", f"{owner}/{repo}"
        )
        return self._normalize_tree(data, "get_tree")

    async def get_user_emails(self) -> list[UserEmail]:
        """
        Fetch email addresses of the authenticated account.

        Requires the `user:email` scope (classic tokens) or
        "Email addresses" read permission (fine-grained tokens).
        """
        data = await self._call("GET", "/user/emails", "get_user_emails", "user")
        return [
            UserEmail(
                email=require_field(item, "get_user_emails", "email"),
                primary=bool(item.get("primary", False)),
                verified=bool(item.get("verified", False)),
                visibility=item.get("visibility"),
            )
            for item in require_object_list(data, "get_user_emails", "emails")
        ]
