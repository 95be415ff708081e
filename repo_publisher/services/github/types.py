"""Data types for GitHub Git Data API requests and responses."""

from dataclasses import dataclass, field
from typing import Any

from repo_publisher.services.github.constants import BLOB_MODE, BLOB_TYPE


@dataclass
class Repository:
    """Normalized GitHub repository data."""

    name: str
    owner: str
    full_name: str
    url: str  # Browsing URL (html_url)
    default_branch: str
    is_private: bool


@dataclass
class CommitSummary:
    """Entry from the list-commits endpoint."""

    sha: str
    message: str | None = None


@dataclass
class GitCommit:
    """Git Data API commit object."""

    sha: str
    tree_sha: str
    parents: list[str] = field(default_factory=list)
    message: str | None = None


@dataclass
class GitTreeEntry:
    """Single entry of an existing tree."""

    path: str
    mode: str
    type: str  # "blob" (file) or "tree" (directory)
    sha: str


@dataclass
class GitTree:
    """Git Data API tree object."""

    sha: str
    entries: list[GitTreeEntry]
    truncated: bool = False


@dataclass
class BlobRecord:
    """Result of uploading one local file as a blob."""

    local_path: str
    sha: str
    size: int


@dataclass
class UserEmail:
    """Address from the /user/emails endpoint."""

    email: str
    primary: bool
    verified: bool
    visibility: str | None = None


@dataclass
class Author:
    """Commit author identity."""

    name: str
    email: str

    def to_payload(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email}


@dataclass
class TreeNode:
    """One entry of a tree-creation request. Paths always use `/`."""

    path: str
    sha: str
    mode: str = BLOB_MODE
    type: str = BLOB_TYPE

    def to_payload(self) -> dict[str, str]:
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass
class TreeRequest:
    """Body of POST /git/trees."""

    base_tree: str
    tree: list[TreeNode]

    def to_payload(self) -> dict[str, Any]:
        return {"base_tree": self.base_tree, "tree": [node.to_payload() for node in self.tree]}


@dataclass
class CommitRequest:
    """Body of POST /git/commits."""

    message: str
    tree: str
    parents: list[str]
    author: Author

    def to_payload(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "tree": self.tree,
            "parents": list(self.parents),
            "author": self.author.to_payload(),
        }


@dataclass
class ReferenceUpdate:
    """Body of PATCH /git/refs/heads/{branch}."""

    sha: str
    force: bool = True

    def to_payload(self) -> dict[str, Any]:
        return {"sha": self.sha, "force": self.force}
