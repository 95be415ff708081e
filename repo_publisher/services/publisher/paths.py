"""
Mapping between local files and repository paths.

GitHub tree entries always use `/` separators and are relative to the
repository root, regardless of the local platform.
"""

import os
from pathlib import Path, PurePath

from repo_publisher.services.github.exceptions import PathFormatError

# Depth of the generator's staging layout: root/work-id/project-id/generated-root/...
STAGING_DEPTH = 4


def to_repo_path(path: str | os.PathLike[str], root: str | os.PathLike[str]) -> str:
    """
    Compute the repository path of `path` relative to the published directory.

    Args:
        path: Local file path under `root`
        root: Directory being published (becomes the repository root)

    Returns:
        Relative path joined with `/`, e.g. "src/Main.java"

    Raises:
        PathFormatError: If `path` is empty, equal to `root`, or outside it
    """
    if not os.fspath(path):
        raise PathFormatError("File path should not be empty")

    local = Path(path).absolute()
    base = Path(root).absolute()
    try:
        relative = local.relative_to(base)
    except ValueError as e:
        raise PathFormatError(f"{local} is not inside the published directory {base}") from e

    if not relative.parts:
        raise PathFormatError(f"{local} is the published directory itself, not a file in it")
    return relative.as_posix()


def strip_staging_prefix(path: str, depth: int = STAGING_DEPTH) -> str:
    """
    Drop the first `depth` segments of a staging path.

    Compatibility helper for callers that still hand over paths in the
    generator's staging layout; the publish pipeline itself maps paths with
    to_repo_path and never calls this.

    Both `/` and `\\` count as separators, so Windows paths work too:
    "root/work/proj/gen/src/Main.ext" -> "src/Main.ext".

    Raises:
        PathFormatError: If the path is empty or has no segments left after stripping
    """
    if not path:
        raise PathFormatError("File path should not be empty")

    segments = path.replace("\\", "/").replace(os.sep, "/").split("/")
    if len(segments) <= depth:
        raise PathFormatError(
            f"File path should contain at least {depth} directories before the file: {path}"
        )
    return "/".join(segments[depth:])


def iter_local_files(directory: str | os.PathLike[str]) -> list[Path]:
    """
    Enumerate regular files under `directory`, recursively and in sorted order.

    Directories are not returned as entries of their own.

    Raises:
        PathFormatError: If `directory` does not exist or is not a directory
    """
    root = Path(directory)
    if not root.is_dir():
        raise PathFormatError(f"{root} is not a directory")

    files = [p for p in root.rglob("*") if p.is_file()]
    return sorted(files, key=lambda p: PurePath(p).as_posix())
