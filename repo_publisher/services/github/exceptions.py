"""Exceptions for GitHub publishing."""


class PublishError(Exception):
    """Base error for a failed publish.

    `stage` names the pipeline stage that failed. Remote operations leave it
    unset; the orchestrator fills it in as the error propagates.
    """

    def __init__(self, message: str, stage: str | None = None):
        self.message = message
        self.stage = stage
        super().__init__(message)


class GitHubAPIError(PublishError):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        operation: str | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.status_code = status_code
        self.operation = operation  # Remote call that failed, e.g. "create_blob"
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class TransportError(GitHubAPIError):
    """Network or I/O failure reaching GitHub (includes timeouts)."""


class RemoteStatusError(GitHubAPIError):
    """GitHub answered with a status code other than the one the call expects."""


class SerializationError(GitHubAPIError):
    """Request body could not be encoded or response body could not be decoded."""


class PreconditionError(PublishError):
    """A local invariant about remote state does not hold (e.g. commit count)."""


class PathFormatError(PublishError):
    """A local path cannot be mapped to a repository path."""


class LocalFileError(PublishError):
    """A file under the published directory could not be read."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(message)
