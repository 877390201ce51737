"""
Exception hierarchy for git-hooks.
"""

from __future__ import annotations


class GitHooksError(Exception):
    """Base class for all git-hooks errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(GitHooksError):
    """Configuration is missing or malformed."""


class RestageError(GitHooksError):
    """Modified files could not be re-added to the index."""

    def __init__(self, files: list[str], reason: str):
        self.files = files
        self.reason = reason
        super().__init__(f"Failed to re-stage {', '.join(files)}: {reason}")


class HookInstallError(GitHooksError):
    """A hook script could not be written or removed."""
