"""
Staged-lint pipeline.

Filters staged files by glob, runs lint commands on each match and
restages files the commands fix.
"""

from git_hooks.staged_lint.dispatcher import PatternDispatcher, build_command, dispatch, strip_fix_flags
from git_hooks.staged_lint.glob import expand, filter_by_pattern, matches
from git_hooks.staged_lint.processor import (
    StagedLintProcessor,
    lint_hook,
    resolve_staged_lint,
    run_staged_lint,
)
from git_hooks.staged_lint.restage import RestageCoordinator

__all__ = [
    "expand",
    "matches",
    "filter_by_pattern",
    "build_command",
    "strip_fix_flags",
    "dispatch",
    "PatternDispatcher",
    "RestageCoordinator",
    "StagedLintProcessor",
    "resolve_staged_lint",
    "lint_hook",
    "run_staged_lint",
]
