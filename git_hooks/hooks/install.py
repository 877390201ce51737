"""
Git hook installation utilities.
"""

from __future__ import annotations

import logging
import shlex
import stat
from pathlib import Path
from typing import Optional, Union

from git_hooks.config import GitHooksConfig
from git_hooks.exceptions import HookInstallError
from git_hooks.hooks.git import get_git_dir
from git_hooks.models import VALID_GIT_HOOKS, CommandAction, HookAction

logger = logging.getLogger(__name__)

HOOK_MARKER = "# Installed by: git-hooks install"

HOOK_TEMPLATE = '''#!/bin/sh
# git-hooks - managed {hook} hook
{marker}

# Skip if SKIP_GIT_HOOKS is set
if [ "$SKIP_GIT_HOOKS" = "1" ]; then
    echo "[INFO] SKIP_GIT_HOOKS is set to 1, skipping hook."
    exit 0
fi

# Source user environment, e.g. to put linters on PATH
if [ -f "$GIT_HOOKS_RC" ]; then
    . "$GIT_HOOKS_RC"
fi

{command}
'''

STAGED_LINT_COMMAND = "git-hooks run-staged-lint {hook}"


def get_git_hooks_dir(project_root: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Find the hooks directory of the repository. It may not exist yet."""
    git_dir = get_git_dir(project_root or Path.cwd())
    if git_dir is None:
        return None
    return git_dir / "hooks"


def hook_command(hook: str, action: HookAction, config_path: Optional[Path] = None) -> str:
    """The shell command a hook script should run for an action."""
    if isinstance(action, CommandAction):
        return action.command

    command = STAGED_LINT_COMMAND.format(hook=hook)
    if config_path is not None:
        command += f" --config {shlex.quote(str(config_path))}"
    return command


def render_hook(hook: str, command: str) -> str:
    return HOOK_TEMPLATE.format(hook=hook, marker=HOOK_MARKER, command=command)


def is_managed_hook(hook_path: Path) -> bool:
    """Check whether a hook script was written by git-hooks."""
    try:
        return HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_hook(hook: str, command: str, project_root: Optional[Union[str, Path]] = None) -> bool:
    """
    Install a git hook.

    Args:
        hook: Hook name (pre-commit, pre-push, ...)
        command: Shell command the hook runs
        project_root: Directory inside the repository

    Returns:
        True if successful, False if no repository was found

    Raises:
        HookInstallError: If the script cannot be written
    """
    hooks_dir = get_git_hooks_dir(project_root)
    if not hooks_dir:
        return False

    hook_path = hooks_dir / hook

    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(render_hook(hook, command), encoding="utf-8")
        hook_path.chmod(hook_path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise HookInstallError(f"Cannot write {hook_path}: {e}") from e

    return True


def uninstall_hook(hook: str, project_root: Optional[Union[str, Path]] = None) -> bool:
    """
    Remove a git hook.

    Only scripts installed by git-hooks are removed.

    Returns:
        True if hook was removed
    """
    hooks_dir = get_git_hooks_dir(project_root)
    if not hooks_dir:
        return False

    hook_path = hooks_dir / hook

    if not hook_path.exists() or not is_managed_hook(hook_path):
        return False

    try:
        hook_path.unlink()
    except OSError as e:
        raise HookInstallError(f"Cannot remove {hook_path}: {e}") from e
    return True


def set_hooks_from_config(
    config: GitHooksConfig,
    project_root: Optional[Union[str, Path]] = None,
    config_path: Optional[Path] = None,
    verbose: bool = False,
) -> list[str]:
    """
    Install every configured hook and remove unused managed hooks.

    Hooks listed in ``preserve_unused`` (or all of them when it is True)
    are left alone even if they are not configured.

    Args:
        config: Parsed configuration
        project_root: Directory inside the repository
        config_path: Explicit config file to pass to staged-lint hooks
        verbose: Log each hook written or removed

    Returns:
        Names of the hooks that were installed
    """
    if get_git_dir(project_root or Path.cwd()) is None:
        logger.info("No .git folder found, skipping hook installation")
        return []

    preserved = config.preserved_hooks()
    installed = []

    for hook in VALID_GIT_HOOKS:
        action = config.hooks.get(hook)
        if action is not None:
            install_hook(hook, hook_command(hook, action, config_path), project_root)
            installed.append(hook)
            if verbose:
                logger.info(f"Installed the {hook} hook")
        elif hook not in preserved:
            if uninstall_hook(hook, project_root) and verbose:
                logger.info(f"Removed the unused {hook} hook")

    return installed


def remove_hooks(project_root: Optional[Union[str, Path]] = None, verbose: bool = False) -> list[str]:
    """Remove every hook installed by git-hooks. Returns the removed hook names."""
    removed = []
    for hook in VALID_GIT_HOOKS:
        if uninstall_hook(hook, project_root):
            removed.append(hook)
            if verbose:
                logger.info(f"Successfully removed the {hook} hook")
    return removed
