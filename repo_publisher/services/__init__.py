# Services package

from repo_publisher.services.github import GitHubService
from repo_publisher.services.publisher import RepositoryPublisher

__all__ = [
    "GitHubService",
    "RepositoryPublisher",
]
