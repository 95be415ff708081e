"""
GitHub service package.

Re-exports all public types and classes.
Usage: `from repo_publisher.services.github import GitHubService, TreeRequest`

Module structure:
- service.py: Main GitHubService facade
- read_operations.py: Read-only API operations (commits, trees, emails)
- write_operations.py: Mutating API operations (repos, blobs, trees, commits, refs)
- base.py: Credentials, headers and request execution shared by both
- helpers.py: Rate limit handling and error utilities
- types.py: Request and response data types
- exceptions.py: Error taxonomy for a publish run
- constants.py: API constants
"""

from repo_publisher.services.github.exceptions import (
    GitHubAPIError,
    LocalFileError,
    PathFormatError,
    PreconditionError,
    PublishError,
    RemoteStatusError,
    SerializationError,
    TransportError,
)
from repo_publisher.services.github.helpers import RateLimitInfo, handle_error_response
from repo_publisher.services.github.http_client import close_github_client, get_github_client
from repo_publisher.services.github.read_operations import GitHubReadOperations
from repo_publisher.services.github.service import GitHubService
from repo_publisher.services.github.types import (
    Author,
    BlobRecord,
    CommitRequest,
    CommitSummary,
    GitCommit,
    GitTree,
    GitTreeEntry,
    ReferenceUpdate,
    Repository,
    TreeNode,
    TreeRequest,
    UserEmail,
)
from repo_publisher.services.github.write_operations import GitHubWriteOperations

__all__ = [
    # Service (main entry point)
    "GitHubService",
    # Operation classes (for direct use if needed)
    "GitHubReadOperations",
    "GitHubWriteOperations",
    # HTTP client lifecycle
    "get_github_client",
    "close_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "PublishError",
    "GitHubAPIError",
    "TransportError",
    "RemoteStatusError",
    "SerializationError",
    "PreconditionError",
    "PathFormatError",
    "LocalFileError",
    # Types
    "Author",
    "BlobRecord",
    "CommitRequest",
    "CommitSummary",
    "GitCommit",
    "GitTree",
    "GitTreeEntry",
    "ReferenceUpdate",
    "Repository",
    "TreeNode",
    "TreeRequest",
    "UserEmail",
]
