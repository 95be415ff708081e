"""
Parallel blob upload with bounded concurrency.

Every file becomes one create-blob request, taken from a queue by at most
`max_concurrent` workers per run. At most `max_concurrent` requests are in
flight for a pool, across all publish runs sharing it. The batch is
all-or-nothing: the first failure cancels the remaining uploads and is raised.
"""

import asyncio
import logging
from pathlib import Path

from repo_publisher.services.github.exceptions import LocalFileError
from repo_publisher.services.github.service import GitHubService
from repo_publisher.services.github.types import BlobRecord

logger = logging.getLogger(__name__)


class BlobUploadPool:
    """
    Uploads local files as blobs through a fixed set of workers draining a queue.

    Each upload also holds the pool's semaphore, so runs sharing a pool share
    one in-flight limit.

    Blobs already created when a batch fails are left on GitHub; they are
    unreferenced content-addressed objects and are garbage collected remotely.
    """

    def __init__(self, service: GitHubService, max_concurrent: int):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.service = service
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def upload_file(self, owner: str, repo: str, path: Path) -> BlobRecord:
        """Read one file and create its blob."""
        async with self._semaphore:
            try:
                content = await asyncio.to_thread(path.read_bytes)
            except OSError as e:
                raise LocalFileError(f"Failed to read {path}: {e}", str(path)) from e

            sha = await self.service.create_blob(owner, repo, content)
            logger.debug(f"Uploaded blob {sha} for {path} ({len(content)} bytes)")
            return BlobRecord(local_path=str(path), sha=sha, size=len(content))

    async def upload(self, owner: str, repo: str, files: list[Path]) -> dict[str, BlobRecord]:
        """
        Upload all files and return the local path -> BlobRecord mapping.

        Args:
            owner: Repository owner
            repo: Repository name
            files: Local files to upload

        Returns:
            One BlobRecord per file, keyed by str(local path)

        Raises:
            PublishError: The first upload failure; remaining uploads are cancelled
        """
        if not files:
            return {}

        queue: asyncio.Queue[Path] = asyncio.Queue()
        for path in files:
            queue.put_nowait(path)
        records: list[BlobRecord] = []

        async def worker() -> None:
            while True:
                try:
                    path = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                records.append(await self.upload_file(owner, repo, path))

        # Never more tasks than the concurrency limit, however many files there are
        workers = [
            asyncio.create_task(worker()) for _ in range(min(self.max_concurrent, len(files)))
        ]
        try:
            await asyncio.gather(*workers)
        except BaseException:
            for task in workers:
                task.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            raise

        logger.info(f"Uploaded {len(records)} blobs to {owner}/{repo}")
        return {record.local_path: record for record in records}
