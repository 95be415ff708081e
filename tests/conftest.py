"""Root conftest: shared fixtures for publisher tests.

Provides:
- anyio backend pinned to asyncio
- An in-memory fake GitHub and an httpx client routed to it
- A GitHubService and a deterministic RepositoryPublisher (one upload at a time)
- A small generated project on disk
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from repo_publisher.services.github.service import GitHubService
from repo_publisher.services.publisher.blob_upload import BlobUploadPool
from repo_publisher.services.publisher.builders import AuthorResolver
from repo_publisher.services.publisher.orchestrator import RepositoryPublisher
from tests.helpers.fake_github import FakeGitHub

TOKEN = "ghp_test_token_12345"
OWNER = "octocat"
FALLBACK_EMAIL = "noreply@github.com"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ─────────────────────────────────────────────────────────────────────────────
# Fake GitHub
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub(owner=OWNER)


@pytest.fixture
def http_client(fake_github: FakeGitHub) -> httpx.AsyncClient:
    return fake_github.client()


@pytest.fixture
def github_service(http_client: httpx.AsyncClient) -> GitHubService:
    return GitHubService(TOKEN, client=http_client, base_url="https://api.github.com")


@pytest.fixture
def publisher(github_service: GitHubService) -> RepositoryPublisher:
    return RepositoryPublisher(
        github_service,
        OWNER,
        upload_pool=BlobUploadPool(github_service, max_concurrent=1),
        author_resolver=AuthorResolver(github_service, FALLBACK_EMAIL),
        commit_message="Add generated project",
        private=False,
        delete_on_failure=False,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Local project
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Generated project with src/App.txt ("hello") and README.md ("world")."""
    root = tmp_path / "generated"
    (root / "src").mkdir(parents=True)
    (root / "src" / "App.txt").write_bytes(b"hello")
    (root / "README.md").write_bytes(b"world")
    return root
