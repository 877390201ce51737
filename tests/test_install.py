"""
Tests for hook script installation.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from git_hooks.config import GitHooksConfig
from git_hooks.hooks.git import get_git_dir
from git_hooks.hooks.install import (
    HOOK_MARKER,
    get_git_hooks_dir,
    hook_command,
    install_hook,
    is_managed_hook,
    remove_hooks,
    set_hooks_from_config,
    uninstall_hook,
)
from git_hooks.models import CommandAction, StagedLintAction


@pytest.fixture
def repo(tmp_path):
    """A directory that looks like a git repository."""
    (tmp_path / ".git").mkdir()
    return tmp_path


class TestGitDir:
    """Tests for locating the git directory."""

    def test_from_root(self, repo):
        assert get_git_dir(repo) == (repo / ".git").resolve()

    def test_from_subdirectory(self, repo):
        nested = repo / "src" / "pkg"
        nested.mkdir(parents=True)
        assert get_git_dir(nested) == (repo / ".git").resolve()

    def test_from_git_dir_itself(self, repo):
        assert get_git_dir(repo / ".git") == (repo / ".git").resolve()

    def test_gitdir_file(self, tmp_path):
        real = tmp_path / "real.git"
        real.mkdir()
        worktree = tmp_path / "worktree"
        worktree.mkdir()
        (worktree / ".git").write_text(f"gitdir: {real}\n")
        assert get_git_dir(worktree) == real.resolve()

    def test_gitdir_file_with_commondir(self, tmp_path):
        common = tmp_path / "main" / ".git"
        linked = common / "worktrees" / "wt"
        linked.mkdir(parents=True)
        (linked / "commondir").write_text("../..\n")
        worktree = tmp_path / "wt"
        worktree.mkdir()
        (worktree / ".git").write_text(f"gitdir: {linked}\n")
        assert get_git_dir(worktree) == common.resolve()


class TestInstallHook:
    """Tests for installing and removing single hooks."""

    def test_install_writes_executable_script(self, repo):
        assert install_hook("pre-push", "pytest -q", repo)

        hook_path = repo / ".git" / "hooks" / "pre-push"
        content = hook_path.read_text()
        assert content.startswith("#!/bin/sh")
        assert "SKIP_GIT_HOOKS" in content
        assert "GIT_HOOKS_RC" in content
        assert content.rstrip().endswith("pytest -q")
        assert os.access(hook_path, os.X_OK)

    def test_install_outside_repository(self, tmp_path):
        assert get_git_hooks_dir(tmp_path) is None
        assert not install_hook("pre-push", "pytest", tmp_path)

    def test_uninstall_managed_hook(self, repo):
        install_hook("pre-push", "pytest", repo)
        assert uninstall_hook("pre-push", repo)
        assert not (repo / ".git" / "hooks" / "pre-push").exists()

    def test_uninstall_leaves_foreign_hook(self, repo):
        hooks_dir = get_git_hooks_dir(repo)
        hooks_dir.mkdir()
        foreign = hooks_dir / "pre-push"
        foreign.write_text("#!/bin/sh\nexit 0\n")

        assert not uninstall_hook("pre-push", repo)
        assert foreign.exists()
        assert not is_managed_hook(foreign)

    def test_uninstall_missing_hook(self, repo):
        assert not uninstall_hook("pre-push", repo)

    def test_install_creates_hooks_dir(self, repo):
        assert not (repo / ".git" / "hooks").exists()
        assert install_hook("pre-push", "pytest", repo)
        assert (repo / ".git" / "hooks" / "pre-push").exists()

    def test_lookups_do_not_create_hooks_dir(self, repo):
        assert get_git_hooks_dir(repo) == (repo / ".git" / "hooks").resolve()
        assert not uninstall_hook("pre-push", repo)
        assert remove_hooks(repo) == []
        assert not (repo / ".git" / "hooks").exists()


class TestHookCommand:
    """Tests for the command written into hook scripts."""

    def test_plain_command(self):
        assert hook_command("commit-msg", CommandAction("gitlint")) == "gitlint"

    def test_staged_lint(self):
        action = StagedLintAction(patterns={"*.py": ("ruff",)})
        assert hook_command("pre-commit", action) == "git-hooks run-staged-lint pre-commit"

    def test_staged_lint_with_config_path(self):
        action = StagedLintAction(patterns={"*.py": ("ruff",)})
        command = hook_command("pre-commit", action, Path("/cfg/hooks.toml"))
        assert command == "git-hooks run-staged-lint pre-commit --config /cfg/hooks.toml"


class TestSetHooksFromConfig:
    """Tests for installing a whole configuration."""

    def test_installs_configured_hooks(self, repo):
        config = GitHooksConfig.from_dict(
            {"pre-commit": {"stagedLint": {"*.py": "ruff"}}, "commit-msg": "gitlint"}
        )
        installed = set_hooks_from_config(config, repo)

        assert installed == ["pre-commit", "commit-msg"]
        hooks_dir = repo / ".git" / "hooks"
        assert "git-hooks run-staged-lint pre-commit" in (hooks_dir / "pre-commit").read_text()
        assert "gitlint" in (hooks_dir / "commit-msg").read_text()

    def test_removes_unused_hooks(self, repo):
        install_hook("pre-push", "pytest", repo)
        set_hooks_from_config(GitHooksConfig.from_dict({"commit-msg": "gitlint"}), repo)
        assert not (repo / ".git" / "hooks" / "pre-push").exists()

    def test_preserves_listed_hooks(self, repo):
        install_hook("pre-push", "pytest", repo)
        install_hook("post-merge", "make", repo)
        config = GitHooksConfig.from_dict({"commit-msg": "gitlint", "preserveUnused": ["pre-push"]})
        set_hooks_from_config(config, repo)

        hooks_dir = repo / ".git" / "hooks"
        assert (hooks_dir / "pre-push").exists()
        assert not (hooks_dir / "post-merge").exists()

    def test_preserves_all_hooks(self, repo):
        install_hook("pre-push", "pytest", repo)
        config = GitHooksConfig.from_dict({"commit-msg": "gitlint", "preserveUnused": True})
        set_hooks_from_config(config, repo)
        assert (repo / ".git" / "hooks" / "pre-push").exists()

    def test_remove_hooks(self, repo):
        install_hook("pre-push", "pytest", repo)
        install_hook("commit-msg", "gitlint", repo)
        assert remove_hooks(repo) == ["commit-msg", "pre-push"]

    def test_marker_in_scripts(self, repo):
        install_hook("pre-push", "pytest", repo)
        assert HOOK_MARKER in (repo / ".git" / "hooks" / "pre-push").read_text()
