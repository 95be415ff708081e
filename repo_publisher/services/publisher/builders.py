"""
Request builders for the tree, commit and reference stages.

Everything here except AuthorResolver is pure: no remote calls, no I/O.
"""

import logging
import os

from repo_publisher.services.github.exceptions import GitHubAPIError, PreconditionError
from repo_publisher.services.github.service import GitHubService
from repo_publisher.services.github.types import (
    Author,
    BlobRecord,
    CommitRequest,
    GitCommit,
    GitTree,
    ReferenceUpdate,
    TreeNode,
    TreeRequest,
    UserEmail,
)
from repo_publisher.services.publisher.paths import to_repo_path

logger = logging.getLogger(__name__)


def build_tree_request(
    base_tree: GitTree,
    blobs: dict[str, BlobRecord],
    root: str | os.PathLike[str],
) -> TreeRequest:
    """
    Build the tree-creation request for the uploaded blobs.

    Args:
        base_tree: Tree of the repository's initial commit
        blobs: Local path -> BlobRecord, as returned by BlobUploadPool.upload
        root: Published directory, used to compute repository paths

    Returns:
        TreeRequest with one regular-file node per blob, sorted by path
    """
    nodes = [
        TreeNode(path=to_repo_path(record.local_path, root), sha=record.sha)
        for record in blobs.values()
    ]
    nodes.sort(key=lambda node: node.path)
    return TreeRequest(base_tree=base_tree.sha, tree=nodes)


def build_commit_request(
    parent: GitCommit,
    tree_sha: str,
    author: Author,
    message: str,
) -> CommitRequest:
    """Build a commit request with `parent` as its only parent."""
    logger.info(f"Building commit request for {author.name} <{author.email}>")
    return CommitRequest(message=message, tree=tree_sha, parents=[parent.sha], author=author)


def build_reference_update(commit: GitCommit) -> ReferenceUpdate:
    """
    Build a forced reference update to `commit`.

    The tree is rebuilt wholesale rather than incrementally, so the update is
    forced to avoid any fast-forward rejection.
    """
    return ReferenceUpdate(sha=commit.sha, force=True)


def select_email(emails: list[UserEmail]) -> str | None:
    """Pick the primary verified address, else any verified one."""
    for entry in emails:
        if entry.primary and entry.verified:
            return entry.email
    for entry in emails:
        if entry.verified:
            return entry.email
    return None


class AuthorResolver:
    """
    Resolves the commit author from the authenticated account.

    If the email lookup fails or yields no verified address, `fallback_email`
    is used. With `fallback_email=None` that situation raises instead.
    """

    def __init__(self, service: GitHubService, fallback_email: str | None):
        self.service = service
        self.fallback_email = fallback_email

    async def resolve(self, login: str) -> Author:
        """
        Build the Author for `login`.

        Raises:
            PreconditionError: If no usable email exists and no fallback is configured
        """
        try:
            email = select_email(await self.service.get_user_emails())
            reason = "no verified email address on the account"
        except GitHubAPIError as e:
            email = None
            reason = f"email lookup failed: {e.message}"

        if email is not None:
            return Author(name=login, email=email)

        if self.fallback_email is None:
            raise PreconditionError(f"Cannot determine commit author email for {login}: {reason}")

        logger.warning(f"Using fallback author email for {login} ({reason})")
        return Author(name=login, email=self.fallback_email)
