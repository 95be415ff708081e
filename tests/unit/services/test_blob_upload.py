"""Unit tests for the bounded-parallel blob upload pool."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from repo_publisher.services.github.exceptions import LocalFileError, RemoteStatusError
from repo_publisher.services.github.service import GitHubService
from repo_publisher.services.publisher.blob_upload import BlobUploadPool
from tests.helpers.fake_github import FakeGitHub, git_blob_sha


def _write_files(root: Path, count: int) -> list[Path]:
    files = []
    for i in range(count):
        path = root / f"file_{i:02d}.txt"
        path.write_bytes(f"content {i}".encode())
        files.append(path)
    return files


class TestBlobUploadPool:
    """Tests for BlobUploadPool.upload."""

    def test_rejects_non_positive_concurrency(self, github_service: GitHubService):
        with pytest.raises(ValueError):
            BlobUploadPool(github_service, max_concurrent=0)

    @pytest.mark.anyio
    async def test_maps_every_path_to_its_git_blob_sha(
        self, github_service: GitHubService, fake_github: FakeGitHub, tmp_path: Path
    ):
        files = _write_files(tmp_path, 5)
        pool = BlobUploadPool(github_service, max_concurrent=3)

        blobs = await pool.upload("octocat", "repo", files)

        assert set(blobs) == {str(f) for f in files}
        for f in files:
            record = blobs[str(f)]
            assert record.sha == git_blob_sha(f.read_bytes())
            assert record.size == len(f.read_bytes())
        assert len(fake_github.calls_for("create_blob")) == 5

    @pytest.mark.anyio
    async def test_identical_content_yields_identical_sha(
        self, github_service: GitHubService, tmp_path: Path
    ):
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_bytes(b"same bytes")
        b.write_bytes(b"same bytes")

        blobs = await BlobUploadPool(github_service, 2).upload("octocat", "repo", [a, b])

        assert blobs[str(a)].sha == blobs[str(b)].sha == git_blob_sha(b"same bytes")

    @pytest.mark.anyio
    async def test_empty_file_list(self, github_service: GitHubService, fake_github: FakeGitHub):
        assert await BlobUploadPool(github_service, 2).upload("octocat", "repo", []) == {}
        assert fake_github.calls == []

    @pytest.mark.anyio
    async def test_binary_content_round_trips(
        self, github_service: GitHubService, fake_github: FakeGitHub, tmp_path: Path
    ):
        path = tmp_path / "logo.png"
        path.write_bytes(bytes(range(256)))

        blobs = await BlobUploadPool(github_service, 1).upload("octocat", "repo", [path])

        assert fake_github.blobs[blobs[str(path)].sha] == bytes(range(256))

    @pytest.mark.anyio
    async def test_never_exceeds_max_concurrent(self, tmp_path: Path):
        in_flight = 0
        peak = 0

        async def create_blob(owner: str, repo: str, content: bytes) -> str:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return git_blob_sha(content)

        service = AsyncMock(spec=GitHubService)
        service.create_blob.side_effect = create_blob
        files = _write_files(tmp_path, 12)

        blobs = await BlobUploadPool(service, max_concurrent=3).upload("o", "r", files)

        assert len(blobs) == 12
        assert 1 < peak <= 3

    @pytest.mark.anyio
    async def test_task_count_does_not_grow_with_file_count(self, tmp_path: Path):
        uploaders: set[asyncio.Task] = set()

        async def create_blob(owner: str, repo: str, content: bytes) -> str:
            task = asyncio.current_task()
            assert task is not None
            uploaders.add(task)
            await asyncio.sleep(0)
            return git_blob_sha(content)

        service = AsyncMock(spec=GitHubService)
        service.create_blob.side_effect = create_blob
        files = _write_files(tmp_path, 40)

        blobs = await BlobUploadPool(service, max_concurrent=2).upload("o", "r", files)

        assert len(blobs) == 40
        assert len(uploaders) <= 2

    @pytest.mark.anyio
    async def test_one_remote_failure_fails_the_batch(
        self, github_service: GitHubService, fake_github: FakeGitHub, tmp_path: Path
    ):
        files = _write_files(tmp_path, 4)
        fake_github.fail_blob_contents.add(b"content 2")

        with pytest.raises(RemoteStatusError) as exc_info:
            await BlobUploadPool(github_service, 1).upload("octocat", "repo", files)

        assert exc_info.value.status_code == 500
        assert exc_info.value.operation == "create_blob"

    @pytest.mark.anyio
    async def test_failure_cancels_pending_uploads(self, tmp_path: Path):
        started: list[bytes] = []

        async def create_blob(owner: str, repo: str, content: bytes) -> str:
            started.append(content)
            if content == b"content 0":
                raise RemoteStatusError("boom", 500, "create_blob")
            await asyncio.sleep(0.01)
            return git_blob_sha(content)

        service = AsyncMock(spec=GitHubService)
        service.create_blob.side_effect = create_blob
        files = _write_files(tmp_path, 6)

        with pytest.raises(RemoteStatusError):
            await BlobUploadPool(service, max_concurrent=1).upload("o", "r", files)

        # Sequential pool: at most the next queued upload got going before cancellation
        assert started[0] == b"content 0"
        assert len(started) <= 2

    @pytest.mark.anyio
    async def test_unreadable_file_raises_local_file_error(
        self, github_service: GitHubService, tmp_path: Path
    ):
        missing = tmp_path / "vanished.txt"

        with pytest.raises(LocalFileError) as exc_info:
            await BlobUploadPool(github_service, 1).upload("octocat", "repo", [missing])

        assert exc_info.value.path == str(missing)
