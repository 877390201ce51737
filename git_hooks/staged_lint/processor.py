"""
Staged-lint orchestration.

Resolves the pattern map that applies to a hook, lists the staged files,
dispatches the lint commands and hands modified files to the restage
coordinator. Every outcome is reduced to a result object; no exception
escapes ``run_staged_lint``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from git_hooks.config import GitHooksConfig
from git_hooks.exceptions import ConfigError, RestageError
from git_hooks.hooks.git import list_staged_files
from git_hooks.models import (
    FailureKind,
    PatternMap,
    StagedLintAction,
    StagedLintResult,
    canonical_hook_name,
)
from git_hooks.staged_lint.dispatcher import PatternDispatcher
from git_hooks.staged_lint.restage import RestageCoordinator

logger = logging.getLogger(__name__)

ConfigLike = Union[GitHooksConfig, Mapping[str, Any]]


class StagedLintProcessor:
    """
    Runs one pattern map against the currently staged files.

    Usage:
        processor = StagedLintProcessor("/path/to/repo", verbose=True)
        ok = processor.process({"**/*.py": ["ruff check --fix", "mypy"]})
    """

    def __init__(
        self,
        project_root: Optional[Union[str, Path]] = None,
        verbose: bool = False,
        auto_restage: bool = True,
        timeout: Optional[float] = None,
    ):
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.verbose = verbose
        self.auto_restage = auto_restage
        self.dispatcher = PatternDispatcher(self.project_root, verbose=verbose, timeout=timeout)

    def run(self, pattern_map: PatternMap) -> StagedLintResult:
        """Lint the staged files and restage fixes according to settings."""
        try:
            return self._run(pattern_map)
        except Exception as e:
            logger.exception("Staged lint process failed")
            return StagedLintResult(success=False, failure=FailureKind.INTERNAL, message=str(e))

    def _run(self, pattern_map: PatternMap) -> StagedLintResult:
        staged_files = list_staged_files(self.project_root)
        if not staged_files:
            self._log("No staged files found")
            return StagedLintResult(success=True)

        self._log(f"Processing {len(staged_files)} staged file(s)")

        coordinator = RestageCoordinator(
            self.project_root,
            auto_restage=self.auto_restage,
            verbose=self.verbose,
        )
        coordinator.capture(staged_files)

        first_pass = self.dispatcher.run(pattern_map, staged_files)
        result = StagedLintResult(
            success=first_pass.success,
            staged_files=staged_files,
            results=list(first_pass.results),
        )

        if not first_pass.success:
            result.failure = FailureKind.COMMAND
            result.message = f'Lint failed for pattern "{first_pass.failed_pattern}"'
            if not self.auto_restage:
                coordinator.settle(self.dispatcher, pattern_map, result)
            return result

        try:
            return coordinator.settle(self.dispatcher, pattern_map, result)
        except RestageError as e:
            logger.error(e.message)
            result.success = False
            result.failure = FailureKind.RESTAGE
            result.message = e.message
            return result

    def process(self, pattern_map: PatternMap) -> bool:
        """Lint the staged files and report whether the commit may proceed."""
        return self.run(pattern_map).success

    def _log(self, message: str) -> None:
        if self.verbose:
            logger.info(f"[staged-lint] {message}")


def resolve_staged_lint(
    hook: str,
    config: GitHooksConfig,
    auto_restage: Optional[bool] = None,
) -> tuple[PatternMap, bool]:
    """
    Find the pattern map and auto-restage setting for a hook.

    The hook's own staged-lint map wins over the global one. Auto-restage
    is taken from, in order: the explicit argument, the hook, the global
    setting, and finally defaults to True.

    Raises:
        ConfigError: If neither the hook nor the config has a staged-lint map
    """
    action = config.hooks.get(canonical_hook_name(hook) or hook)

    if isinstance(action, StagedLintAction):
        patterns: Optional[PatternMap] = action.patterns
        configured = action.auto_restage
        if configured is None:
            configured = config.auto_restage
    else:
        patterns = config.staged_lint
        configured = config.auto_restage

    if patterns is None:
        raise ConfigError(f"No staged lint configuration found for hook {hook}")

    if auto_restage is not None:
        return patterns, auto_restage
    return patterns, True if configured is None else configured


def lint_hook(
    hook: str,
    config: ConfigLike,
    project_root: Optional[Union[str, Path]] = None,
    verbose: bool = False,
    auto_restage: Optional[bool] = None,
    timeout: Optional[float] = None,
) -> StagedLintResult:
    """
    Run staged lint for a hook and return the detailed result.

    Args:
        hook: Hook name, kebab-case or camelCase
        config: Parsed config or a raw mapping in config-file shape
        project_root: Repository working tree (defaults to cwd)
        verbose: Log diagnostic output
        auto_restage: Explicit override of the configured auto-restage setting
        timeout: Optional per-command timeout in seconds

    Returns:
        StagedLintResult
    """
    try:
        if not isinstance(config, GitHooksConfig):
            config = GitHooksConfig.from_dict(config)
    except ConfigError as e:
        logger.error(e.message)
        return StagedLintResult(success=False, failure=FailureKind.CONFIG, message=e.message)

    try:
        patterns, should_restage = resolve_staged_lint(hook, config, auto_restage)
    except ConfigError as e:
        logger.error(e.message)
        return StagedLintResult(success=False, failure=FailureKind.NO_CONFIG, message=e.message)

    processor = StagedLintProcessor(
        project_root,
        verbose=verbose or config.verbose,
        auto_restage=should_restage,
        timeout=timeout,
    )
    return processor.run(patterns)


def run_staged_lint(
    hook: str,
    config: ConfigLike,
    project_root: Optional[Union[str, Path]] = None,
    verbose: bool = False,
    auto_restage: Optional[bool] = None,
) -> bool:
    """Run staged lint for a hook. Returns True when the commit may proceed."""
    return lint_hook(hook, config, project_root, verbose=verbose, auto_restage=auto_restage).success
