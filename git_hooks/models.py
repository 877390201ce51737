"""
Data models for git-hooks.

Hook names, the per-hook action variant produced by configuration parsing,
and the result objects returned by the staged-lint pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence, Union


class GitHook(str, Enum):
    """Hook names git will invoke from the hooks directory."""

    APPLYPATCH_MSG = "applypatch-msg"
    PRE_APPLYPATCH = "pre-applypatch"
    POST_APPLYPATCH = "post-applypatch"
    PRE_COMMIT = "pre-commit"
    PRE_MERGE_COMMIT = "pre-merge-commit"
    PREPARE_COMMIT_MSG = "prepare-commit-msg"
    COMMIT_MSG = "commit-msg"
    POST_COMMIT = "post-commit"
    PRE_REBASE = "pre-rebase"
    POST_CHECKOUT = "post-checkout"
    POST_MERGE = "post-merge"
    PRE_PUSH = "pre-push"
    PRE_RECEIVE = "pre-receive"
    UPDATE = "update"
    PROC_RECEIVE = "proc-receive"
    POST_RECEIVE = "post-receive"
    POST_UPDATE = "post-update"
    REFERENCE_TRANSACTION = "reference-transaction"
    PUSH_TO_CHECKOUT = "push-to-checkout"
    PRE_AUTO_GC = "pre-auto-gc"
    POST_REWRITE = "post-rewrite"
    SENDEMAIL_VALIDATE = "sendemail-validate"
    FSMONITOR_WATCHMAN = "fsmonitor-watchman"
    P4_CHANGELIST = "p4-changelist"
    P4_PREPARE_CHANGELIST = "p4-prepare-changelist"
    P4_POST_CHANGELIST = "p4-post-changelist"
    P4_PRE_SUBMIT = "p4-pre-submit"
    POST_INDEX_CHANGE = "post-index-change"


VALID_GIT_HOOKS: tuple[str, ...] = tuple(hook.value for hook in GitHook)

# Only this hook may carry a staged-lint pattern map
STAGED_LINT_HOOKS: frozenset[str] = frozenset({GitHook.PRE_COMMIT.value})


def to_camel_case(name: str) -> str:
    """Convert a kebab-case identifier to camelCase (``pre-commit`` -> ``preCommit``)."""
    head, *rest = name.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


HOOK_NAME_ALIASES: dict[str, str] = {to_camel_case(hook): hook for hook in VALID_GIT_HOOKS}


def canonical_hook_name(name: str) -> Optional[str]:
    """Return the kebab-case hook name for ``name``, or None if it is not a hook."""
    if name in VALID_GIT_HOOKS:
        return name
    return HOOK_NAME_ALIASES.get(name)


CommandSpec = Union[str, Sequence[str]]
PatternMap = Mapping[str, CommandSpec]


def as_command_list(spec: CommandSpec) -> list[str]:
    """Normalize a single command or a sequence of commands to a list."""
    if isinstance(spec, str):
        return [spec]
    return list(spec)


@dataclass(frozen=True)
class CommandAction:
    """A hook that runs a plain shell command."""

    command: str


@dataclass(frozen=True)
class StagedLintAction:
    """A hook that runs the staged-lint pipeline over a pattern map."""

    patterns: dict[str, tuple[str, ...]]
    auto_restage: Optional[bool] = None


HookAction = Union[CommandAction, StagedLintAction]


class FailureKind(str, Enum):
    """Why a staged-lint run failed."""

    CONFIG = "config"
    NO_CONFIG = "no-config"
    COMMAND = "command"
    RESTAGE = "restage"
    VALIDATION = "validation"
    INTERNAL = "internal"


@dataclass
class CommandResult:
    """Outcome of one lint command run against a set of files."""

    command: str
    files: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def passed(self) -> bool:
        return self.returncode == 0 and not self.timed_out


@dataclass
class DispatchResult:
    """Outcome of one pass over a pattern map."""

    results: list[CommandResult] = field(default_factory=list)
    failed_pattern: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.failed_pattern is None

    @property
    def failed(self) -> Optional[CommandResult]:
        if self.success or not self.results:
            return None
        return self.results[-1]


@dataclass
class StagedLintResult:
    """Outcome of a full staged-lint invocation."""

    success: bool
    failure: Optional[FailureKind] = None
    staged_files: list[str] = field(default_factory=list)
    modified_files: list[str] = field(default_factory=list)
    restaged_files: list[str] = field(default_factory=list)
    results: list[CommandResult] = field(default_factory=list)
    message: str = ""

    def __bool__(self) -> bool:
        return self.success
