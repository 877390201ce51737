"""
git-hooks: declarative git hooks with a staged-file lint runner.

Installs hook scripts from a configuration file and runs linters and
formatters against the staged files that match each glob pattern,
re-staging whatever the formatters fix.
"""

__version__ = "0.1.0"

from git_hooks.config import GitHooksConfig
from git_hooks.exceptions import ConfigError, GitHooksError, HookInstallError, RestageError
from git_hooks.models import (
    VALID_GIT_HOOKS,
    CommandAction,
    CommandResult,
    FailureKind,
    GitHook,
    StagedLintAction,
    StagedLintResult,
)
from git_hooks.staged_lint import StagedLintProcessor, lint_hook, run_staged_lint

__all__ = [
    # Version
    "__version__",
    # Models
    "GitHook",
    "VALID_GIT_HOOKS",
    "CommandAction",
    "StagedLintAction",
    "CommandResult",
    "StagedLintResult",
    "FailureKind",
    # Errors
    "GitHooksError",
    "ConfigError",
    "RestageError",
    "HookInstallError",
    # Core
    "GitHooksConfig",
    "StagedLintProcessor",
    "lint_hook",
    "run_staged_lint",
]
