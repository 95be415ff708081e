"""
GitHub API service for publishing repositories.

Combines the read and write operation classes into the single client the
publisher talks to.
"""

from repo_publisher.services.github.read_operations import GitHubReadOperations
from repo_publisher.services.github.write_operations import GitHubWriteOperations


class GitHubService(GitHubReadOperations, GitHubWriteOperations):
    """Service for interacting with the GitHub REST and Git Data APIs."""
