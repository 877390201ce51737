"""
Git hooks for git-hooks.

Provides utilities for:
- Installing and removing hook scripts
- Reading and updating the git index
"""

from git_hooks.hooks.git import (
    add_to_index,
    get_git_dir,
    list_staged_files,
    snapshot_content,
)
from git_hooks.hooks.install import (
    get_git_hooks_dir,
    install_hook,
    remove_hooks,
    set_hooks_from_config,
    uninstall_hook,
)

__all__ = [
    "install_hook",
    "uninstall_hook",
    "set_hooks_from_config",
    "remove_hooks",
    "get_git_hooks_dir",
    "get_git_dir",
    "list_staged_files",
    "snapshot_content",
    "add_to_index",
]
