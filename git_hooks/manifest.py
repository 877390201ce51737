"""
Package manifest inspection.

Checks whether a project declares git-hooks in its pyproject.toml, and
whether it does so as a development dependency.
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Any, Iterable, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "git-hooks-py"

_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


def normalize_name(name: str) -> str:
    """Normalize a distribution name the way package indexes compare them."""
    return re.sub(r"[-_.]+", "-", name).lower()


def requirement_name(requirement: str) -> Optional[str]:
    """Extract the normalized distribution name from a requirement string."""
    match = _REQUIREMENT_NAME.match(requirement)
    return normalize_name(match.group(1)) if match else None


def _declares(requirements: Iterable[Any]) -> bool:
    target = normalize_name(DISTRIBUTION_NAME)
    return any(
        isinstance(req, str) and requirement_name(req) == target for req in requirements
    )


def check_in_dependencies(project_root: Union[str, Path]) -> bool:
    """
    Check whether git-hooks is declared in the project's pyproject.toml.

    Optional dependencies and dependency groups count as the expected
    place. A runtime dependency also counts, but logs a warning suggesting
    a move to a dev extra.

    Args:
        project_root: Directory containing pyproject.toml

    Returns:
        True if declared anywhere, False otherwise (including a missing
        or unreadable manifest)
    """
    manifest = Path(project_root) / "pyproject.toml"
    try:
        with open(manifest, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug(f"Cannot read {manifest}: {e}")
        return False

    project = data.get("project", {})

    if _declares(project.get("dependencies", [])):
        logger.warning(
            f"You should move {DISTRIBUTION_NAME} to a development extra "
            "(optional-dependencies or dependency-groups)!"
        )
        return True

    dev_sections = [
        *project.get("optional-dependencies", {}).values(),
        *data.get("dependency-groups", {}).values(),
    ]
    return any(_declares(section) for section in dev_sections if isinstance(section, list))
