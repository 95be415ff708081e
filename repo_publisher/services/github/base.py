"""Shared request plumbing for the GitHub operation classes."""

from typing import Any

import httpx

from repo_publisher.config import settings
from repo_publisher.services.github.constants import ACCEPT_HEADER
from repo_publisher.services.github.helpers import (
    handle_error_response,
    parse_json,
    require_field,
    require_object_list,
    send_request,
)
from repo_publisher.services.github.http_client import get_github_client
from repo_publisher.services.github.types import GitCommit, GitTree, GitTreeEntry


class GitHubOperationsBase:
    """
    Holds credentials and sends authenticated GitHub API requests.

    Uses the shared HTTP client singleton unless a client is injected
    (tests inject one backed by httpx.MockTransport).
    """

    def __init__(
        self,
        token: str,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        api_version: str | None = None,
    ):
        self.token = token
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self._client = client
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": ACCEPT_HEADER,
            "X-GitHub-Api-Version": api_version or settings.github_api_version,
        }

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client if self._client is not None else get_github_client()

    async def _call(
        self,
        method: str,
        path: str,
        operation: str,
        repo_name: str,
        payload: dict[str, Any] | None = None,
        expect_body: bool = True,
    ) -> Any:
        """Send a request, check its status, and return the decoded body (or None)."""
        response = await send_request(
            self.client,
            method,
            f"{self.base_url}{path}",
            operation,
            self._headers,
            payload,
        )
        handle_error_response(response, operation, repo_name)
        if not expect_body:
            return None
        return parse_json(response, operation)

    def _normalize_commit(self, data: Any, operation: str) -> GitCommit:
        """Convert a Git Data commit payload to GitCommit."""
        sha = require_field(data, operation, "sha")
        tree_sha = require_field(data, operation, "tree", "sha")
        parents = require_object_list(data.get("parents", []), operation, "parents")
        return GitCommit(
            sha=sha,
            tree_sha=tree_sha,
            parents=[p["sha"] for p in parents if "sha" in p],
            message=data.get("message"),
        )

    def _normalize_tree(self, data: Any, operation: str) -> GitTree:
        """Convert a Git Data tree payload to GitTree."""
        sha = require_field(data, operation, "sha")
        items = require_object_list(require_field(data, operation, "tree"), operation, "tree")
        entries = [
            GitTreeEntry(
                path=item["path"],
                mode=item.get("mode", ""),
                type=item.get("type", ""),
                sha=item.get("sha", ""),
            )
            for item in items
            if "path" in item
        ]
        return GitTree(
            sha=sha,
            entries=entries,
            truncated=data.get("truncated", False),
        )
