"""
Publisher package.

Assembles a local directory into a single commit of a new GitHub repository.
Usage: `from repo_publisher.services.publisher import RepositoryPublisher`
"""

from repo_publisher.services.publisher.blob_upload import BlobUploadPool
from repo_publisher.services.publisher.builders import (
    AuthorResolver,
    build_commit_request,
    build_reference_update,
    build_tree_request,
)
from repo_publisher.services.publisher.orchestrator import PublishStage, RepositoryPublisher
from repo_publisher.services.publisher.paths import (
    STAGING_DEPTH,
    iter_local_files,
    strip_staging_prefix,
    to_repo_path,
)

__all__ = [
    "RepositoryPublisher",
    "PublishStage",
    "BlobUploadPool",
    "AuthorResolver",
    "build_tree_request",
    "build_commit_request",
    "build_reference_update",
    "iter_local_files",
    "to_repo_path",
    "strip_staging_prefix",
    "STAGING_DEPTH",
]
