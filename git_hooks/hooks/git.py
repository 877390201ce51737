"""
Git utilities for hooks.

Provides helpers for locating the repository and for reading and
updating the index during a staged-lint run.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Iterable, Optional, Union

from git_hooks.exceptions import RestageError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_GITDIR_LINE = re.compile(r"^gitdir: (.*?)\s*$", re.MULTILINE)


def list_staged_files(project_root: PathLike) -> list[str]:
    """
    List files staged for the next commit.

    Only added, copied, modified and renamed files are reported; deletions
    are left out since there is nothing on disk to lint.

    Args:
        project_root: Repository working tree

    Returns:
        Repository-relative paths, or an empty list if git fails
    """
    try:
        result = subprocess.run(
            ["git", "diff", "--cached", "--name-only", "--diff-filter=ACMR", "-z"],
            capture_output=True,
            check=True,
            cwd=project_root,
        )
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug(f"Could not list staged files: {e}")
        return []

    # Names are raw bytes; os.fsdecode keeps undecodable ones round-trippable
    names = result.stdout.strip(b"\0\n").split(b"\0")
    return [os.fsdecode(name) for name in names if name.strip()]


def read_staged_content(project_root: PathLike, file: str) -> Optional[bytes]:
    """Read the index blob for a file, or None if it has none."""
    try:
        result = subprocess.run(
            ["git", "show", f":{file}"],
            capture_output=True,
            check=True,
            cwd=project_root,
        )
        return result.stdout
    except (subprocess.CalledProcessError, OSError):
        return None


def read_working_file(project_root: PathLike, file: str) -> Optional[bytes]:
    """Read a file from the working tree, or None if it cannot be read."""
    try:
        return (Path(project_root) / file).read_bytes()
    except OSError:
        return None


def snapshot_content(project_root: PathLike, files: Iterable[str]) -> dict[str, bytes]:
    """
    Capture the staged content of files before any command touches them.

    Falls back to the working-tree copy when the index has no blob for a
    file. Files that can be read neither way are left out.
    """
    snapshot: dict[str, bytes] = {}
    for file in files:
        content = read_staged_content(project_root, file)
        if content is None:
            content = read_working_file(project_root, file)
        if content is None:
            logger.debug(f"Skipping unreadable file in snapshot: {file}")
            continue
        snapshot[file] = content
    return snapshot


def add_to_index(project_root: PathLike, files: list[str]) -> None:
    """
    Stage files in a single ``git add`` call.

    Raises:
        RestageError: If git refuses the add
    """
    if not files:
        return

    try:
        subprocess.run(
            ["git", "add", "--", *files],
            capture_output=True,
            text=True,
            errors="replace",
            check=True,
            cwd=project_root,
        )
    except subprocess.CalledProcessError as e:
        raise RestageError(files, (e.stderr or "").strip() or f"exit code {e.returncode}") from e
    except OSError as e:
        raise RestageError(files, str(e)) from e


def get_git_dir(directory: PathLike) -> Optional[Path]:
    """
    Find the git directory for a path by walking up the tree.

    A ``.git`` file (worktrees, submodules) is followed through its
    ``gitdir:`` line, and through ``commondir`` when present, so hooks end
    up in the shared repository.
    """
    start = Path(directory).resolve()
    if start.name == ".git":
        return start

    for current in (start, *start.parents):
        candidate = current / ".git"
        if candidate.is_dir():
            return candidate
        if candidate.is_file():
            match = _GITDIR_LINE.search(candidate.read_text(encoding="utf-8"))
            if not match:
                return candidate
            git_dir = (current / match.group(1)).resolve()
            common = git_dir / "commondir"
            if common.is_file():
                return (git_dir / common.read_text(encoding="utf-8").strip()).resolve()
            return git_dir

    return None


def get_repo_root(cwd: Optional[PathLike] = None) -> Optional[str]:
    """Get the root directory of the git repository."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, OSError):
        return None
