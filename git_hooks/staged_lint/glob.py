"""
Glob pattern matching for staged files.

Supports:
- ``*``  any run of characters except ``/``
- ``**`` any run of characters including ``/``
- ``?``  a single character except ``/``
- ``{a,b}`` brace alternation, expanded combinatorially
- a leading ``!`` to negate a pattern

Everything else is matched literally against the full path.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

NEGATION = "!"

_BRACE_GROUP = re.compile(r"\{([^{}]+)\}")


def expand(pattern: str) -> list[str]:
    """
    Expand brace groups in a pattern.

    Each ``{opt1,opt2,...}`` group multiplies the result, so two groups give
    their cross product. Text around a group is kept as-is.

    Args:
        pattern: Glob pattern, possibly containing brace groups

    Returns:
        List of patterns without brace groups, first group varying slowest
    """
    match = _BRACE_GROUP.search(pattern)
    if not match:
        return [pattern]

    prefix = pattern[: match.start()]
    suffix = pattern[match.end() :]

    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand(prefix + option.strip() + suffix))
    return expanded


@lru_cache(maxsize=256)
def _compile(pattern: str) -> Optional[re.Pattern[str]]:
    """Translate a glob into an anchored regex. Returns None if it cannot compile."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "*":
            # "**/" spans zero or more whole directories
            if pattern.startswith("**/", i):
                parts.append("(?:.*/)?")
                i += 3
                continue
            if pattern.startswith("**", i):
                parts.append(".*")
                i += 2
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
        i += 1

    try:
        return re.compile("^" + "".join(parts) + "$")
    except re.error as e:
        logger.debug(f"Ignoring invalid glob {pattern!r}: {e}")
        return None


def matches(path: str, pattern: str) -> bool:
    """
    Check whether a path matches a single (brace-free) glob pattern.

    A leading ``!`` inverts the result. Matching is always against the whole
    path; a pattern that cannot be compiled matches nothing.
    """
    if pattern.startswith(NEGATION):
        return not matches(path, pattern[1:])

    regex = _compile(pattern)
    if regex is None:
        return False
    return regex.match(path) is not None


def filter_by_pattern(files: Iterable[str], pattern: str) -> list[str]:
    """
    Select the files a pattern applies to.

    The pattern is brace-expanded and split into include and exclude
    expansions. A file is kept if it matches any include (or there are no
    includes at all) and matches no exclude.

    Args:
        files: Candidate paths, relative to the repository root
        pattern: Glob pattern, possibly with braces and negation

    Returns:
        Matching files, in input order
    """
    expansions = expand(pattern)
    includes = [p for p in expansions if not p.startswith(NEGATION)]
    excludes = [p[1:] for p in expansions if p.startswith(NEGATION)]

    selected = []
    for file in files:
        if includes and not any(matches(file, p) for p in includes):
            continue
        if any(matches(file, p) for p in excludes):
            continue
        selected.append(file)
    return selected
