"""
Publish orchestrator.

Turns a local directory into one commit in a brand new GitHub repository:

1. Resolve the commit author
2. Create the repository (auto-initialized, so it has exactly one commit)
3. Read that initial commit and its tree
4. Upload every file as a blob (bounded parallel)
5. Create a tree on top of the initial tree
6. Create a commit whose only parent is the initial commit
7. Force the default branch to the new commit

Stages run strictly in order and are never retried. A failure after the
repository exists leaves it on GitHub for the caller to clean up, unless
delete_repository_on_failure opts in to the registered compensations.
"""

import logging
import os
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from enum import Enum

import httpx

from repo_publisher.config import settings
from repo_publisher.services.github.exceptions import (
    PathFormatError,
    PreconditionError,
    PublishError,
)
from repo_publisher.services.github.service import GitHubService
from repo_publisher.services.publisher.blob_upload import BlobUploadPool
from repo_publisher.services.publisher.builders import (
    AuthorResolver,
    build_commit_request,
    build_reference_update,
    build_tree_request,
)
from repo_publisher.services.publisher.paths import iter_local_files

logger = logging.getLogger(__name__)

Compensation = tuple[str, Callable[[], Awaitable[None]]]


class PublishStage(str, Enum):
    """
    Pipeline stages, in execution order.

    Each value names the work in progress; the state reached once it completes
    is noted beside it. PUBLISHED is terminal and never tagged on an error.
    """

    COLLECT_FILES = "collect_files"
    RESOLVE_AUTHOR = "resolve_author"
    CREATE_REPOSITORY = "create_repository"  # -> RepoCreated
    READ_BASE_COMMIT = "read_base_commit"  # -> BaseCommitRead
    READ_BASE_TREE = "read_base_tree"  # -> BaseTreeRead
    UPLOAD_BLOBS = "upload_blobs"  # -> BlobsUploaded
    CREATE_TREE = "create_tree"  # -> TreeCreated
    CREATE_COMMIT = "create_commit"  # -> CommitCreated
    UPDATE_REFERENCE = "update_reference"  # -> ReferenceUpdated
    PUBLISHED = "published"


class RepositoryPublisher:
    """
    Publishes local directories as new GitHub repositories.

    One instance can serve many publish runs, concurrently or not. Runs share
    only the upload pool (and therefore its concurrency limit); all other state
    is local to a run.
    """

    def __init__(
        self,
        service: GitHubService,
        owner: str,
        upload_pool: BlobUploadPool | None = None,
        author_resolver: AuthorResolver | None = None,
        commit_message: str | None = None,
        private: bool | None = None,
        delete_on_failure: bool | None = None,
    ):
        self.service = service
        self.owner = owner
        self.upload_pool = upload_pool or BlobUploadPool(service, settings.upload_concurrency)
        self.author_resolver = author_resolver or AuthorResolver(service, settings.fallback_email)
        self.commit_message = commit_message or settings.commit_message
        self.private = settings.repository_private if private is None else private
        if delete_on_failure is None:
            delete_on_failure = settings.delete_repository_on_failure
        self.delete_on_failure = delete_on_failure

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient | None = None) -> "RepositoryPublisher":
        """Create a publisher for the account configured in settings."""
        service = GitHubService(settings.github_token, client=client)
        return cls(service, settings.github_owner)

    @contextmanager
    def _stage(self, stage: PublishStage) -> Iterator[None]:
        """Tag any PublishError escaping the block with `stage`."""
        logger.debug(f"Entering stage {stage.value}")
        try:
            yield
        except PublishError as e:
            if e.stage is None:
                e.stage = stage.value
            logger.error(f"Publish failed during {stage.value}: {e.message}")
            raise

    async def _compensate(self, compensations: list[Compensation]) -> None:
        """Run compensations newest first. Their own failures are logged, not raised."""
        if not compensations:
            return
        if not self.delete_on_failure:
            logger.warning(
                f"Leaving {len(compensations)} cleanup action(s) to the caller; "
                "delete_repository_on_failure is off"
            )
            return

        for description, action in reversed(compensations):
            try:
                await action()
                logger.info(f"Cleanup succeeded: {description}")
            except Exception as e:
                logger.warning(f"Cleanup failed: {description}: {e}")

    async def publish(self, directory: str | os.PathLike[str], name: str) -> str:
        """
        Publish `directory` as the first real commit of a new repository.

        Args:
            directory: Local directory; its contents become the repository root
            name: Name of the repository to create

        Returns:
            Browsing URL of the new repository

        Raises:
            PublishError: Subclass describing the failure, with `.stage` set
        """
        with self._stage(PublishStage.COLLECT_FILES):
            files = iter_local_files(directory)
            if not files:
                raise PathFormatError(f"{directory} contains no files to publish")

        compensations: list[Compensation] = []
        try:
            with self._stage(PublishStage.RESOLVE_AUTHOR):
                author = await self.author_resolver.resolve(self.owner)

            with self._stage(PublishStage.CREATE_REPOSITORY):
                repository = await self.service.create_repository(name, private=self.private)
            owner, repo = repository.owner, repository.name
            compensations.append(
                (
                    f"delete repository {repository.full_name}",
                    lambda: self.service.delete_repository(owner, repo),
                )
            )

            with self._stage(PublishStage.READ_BASE_COMMIT):
                commits = await self.service.list_commits(owner, repo)
                if len(commits) != 1:
                    raise PreconditionError(
                        f"Repository {repository.full_name} should contain exactly one "
                        f"commit, found {len(commits)}"
                    )
                base_commit = await self.service.get_commit(owner, repo, commits[0].sha)
            logger.info(f"Base commit of {repository.full_name} is {base_commit.sha}")

            with self._stage(PublishStage.READ_BASE_TREE):
                base_tree = await self.service.get_tree(owner, repo, base_commit.tree_sha)

            with self._stage(PublishStage.UPLOAD_BLOBS):
                blobs = await self.upload_pool.upload(owner, repo, files)

            with self._stage(PublishStage.CREATE_TREE):
                tree_request = build_tree_request(base_tree, blobs, directory)
                tree = await self.service.create_tree(owner, repo, tree_request)
            logger.info(f"Created tree {tree.sha} with {len(tree_request.tree)} files")

            with self._stage(PublishStage.CREATE_COMMIT):
                commit_request = build_commit_request(
                    base_commit, tree.sha, author, self.commit_message
                )
                commit = await self.service.create_commit(owner, repo, commit_request)
            logger.info(f"Created commit {commit.sha}")

            with self._stage(PublishStage.UPDATE_REFERENCE):
                await self.service.update_reference(
                    owner, repo, repository.default_branch, build_reference_update(commit)
                )
            logger.info(
                f"Updated {repository.default_branch} of {repository.full_name} to {commit.sha}"
            )
            logger.info(f"Reached {PublishStage.PUBLISHED.value}: {repository.url}")
        except Exception:
            await self._compensate(compensations)
            raise

        return repository.url
