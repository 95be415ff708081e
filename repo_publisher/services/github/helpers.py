"""
GitHub API helper utilities.

Provides request execution, rate limit handling, and error response processing
shared by the read and write operation classes.
"""

import json
import logging
from typing import Any

import httpx

from repo_publisher.services.github.constants import EXPECTED_STATUS
from repo_publisher.services.github.exceptions import (
    RemoteStatusError,
    SerializationError,
    TransportError,
)

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    operation: str,
    headers: dict[str, str],
    payload: dict[str, Any] | None = None,
) -> httpx.Response:
    """
    Send one GitHub API request, translating local failures to typed errors.

    Args:
        client: HTTP client to send through
        method: HTTP method
        url: Absolute request URL
        operation: Remote operation name, used in error context
        headers: Auth and API-version headers
        payload: Optional JSON body

    Raises:
        SerializationError: If the payload cannot be JSON encoded
        TransportError: If the request never got a response
    """
    content: bytes | None = None
    request_headers = dict(headers)
    if payload is not None:
        try:
            content = json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to encode {operation} request: {e}", operation=operation
            ) from e
        request_headers["Content-Type"] = "application/json"

    try:
        return await client.request(method, url, headers=request_headers, content=content)
    except httpx.TransportError as e:
        raise TransportError(
            f"Failed to reach GitHub during {operation}: {e}", operation=operation
        ) from e


def handle_error_response(response: httpx.Response, operation: str, repo_name: str) -> None:
    """
    Check a response against the status code its operation expects.

    Args:
        response: The HTTP response from GitHub API
        operation: Remote operation name (key of EXPECTED_STATUS)
        repo_name: Repository name for error context (format: "owner/repo")

    Raises:
        RemoteStatusError: For authentication, authorization, or any unexpected status
    """
    expected = EXPECTED_STATUS[operation]
    if response.status_code == expected:
        return

    rate_info = RateLimitInfo(response)
    status = response.status_code

    if status == 401:
        raise RemoteStatusError("Invalid or expired GitHub token", 401, operation)
    elif status == 403 and rate_info.is_exhausted:
        raise RemoteStatusError(
            "GitHub API rate limit exceeded",
            403,
            operation,
            rate_limit_reset=rate_info.reset_timestamp,
        )
    elif status == 403:
        raise RemoteStatusError(f"GitHub API forbidden during {operation}", 403, operation)
    elif status == 404:
        raise RemoteStatusError(
            f"Repository or resource not found during {operation}: {repo_name}",
            404,
            operation,
        )

    logger.debug(f"{operation} on {repo_name} returned {status}: {response.text[:200]!r}")
    raise RemoteStatusError(
        f"GitHub API error during {operation} on {repo_name}: "
        f"expected {expected}, got {status}",
        status,
        operation,
    )


def parse_json(response: httpx.Response, operation: str) -> Any:
    """Decode a JSON response body, raising SerializationError when it is not JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise SerializationError(
            f"Malformed {operation} response from GitHub",
            response.status_code,
            operation,
        ) from e


def require_field(data: Any, operation: str, *keys: str) -> Any:
    """
    Walk nested keys of a decoded response.

    `require_field(body, "get_commit", "tree", "sha")` returns body["tree"]["sha"].

    Raises:
        SerializationError: If any key is missing or an intermediate value is not a dict
    """
    value = data
    for key in keys:
        if not isinstance(value, dict) or key not in value:
            path = ".".join(keys)
            raise SerializationError(
                f"Malformed {operation} response: missing '{path}'", operation=operation
            )
        value = value[key]
    return value


def require_object_list(value: Any, operation: str, name: str) -> list[dict[str, Any]]:
    """
    Check that a decoded value is a list of JSON objects.

    Raises:
        SerializationError: If `value` is not a list or any item is not a dict
    """
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise SerializationError(
            f"Malformed {operation} response: '{name}' should be a list of objects",
            operation=operation,
        )
    return value
