"""
CLI for git-hooks.

Commands:
    git-hooks install           Install git hooks from configuration
    git-hooks uninstall         Remove installed git hooks (alias: remove)
    git-hooks run-staged-lint   Lint staged files for a hook
    git-hooks status            Show configured and installed hooks
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from git_hooks import __version__
from git_hooks.config import GitHooksConfig
from git_hooks.exceptions import ConfigError, GitHooksError
from git_hooks.hooks.git import get_git_dir, get_repo_root
from git_hooks.hooks.install import (
    get_git_hooks_dir,
    is_managed_hook,
    remove_hooks,
    set_hooks_from_config,
)
from git_hooks.manifest import DISTRIBUTION_NAME, check_in_dependencies
from git_hooks.models import VALID_GIT_HOOKS, CommandAction
from git_hooks.staged_lint.processor import lint_hook

console = Console()
err_console = Console(stderr=True)

SKIP_INSTALL_ENV = "SKIP_INSTALL_GIT_HOOKS"


def _configure_logging() -> None:
    """Route package logs through rich on stderr."""
    package_logger = logging.getLogger("git_hooks")
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(
            console=err_console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)


@click.group()
@click.version_option(version=__version__, prog_name="git-hooks")
def main() -> None:
    """git-hooks - Declarative git hooks with staged-file linting."""
    _configure_logging()


@main.command()
@click.argument("config_path", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def install(config_path: str | None, verbose: bool) -> None:
    """Install git hooks, optionally from a specific config file."""
    skip = os.environ.get(SKIP_INSTALL_ENV, "")
    if skip.lower() in ("1", "true"):
        console.print(f'{SKIP_INSTALL_ENV} is set to "{skip}", skipping installing hooks.')
        return

    project_root = Path.cwd()
    if verbose:
        console.print(f"[dim]Config path: {config_path or 'using default'}[/dim]")
        console.print(f"[dim]Working directory: {project_root}[/dim]")

    explicit_path = Path(config_path).resolve() if config_path else None

    try:
        config = GitHooksConfig.load(explicit_path, project_root=project_root)

        if get_git_dir(project_root) is None:
            console.print("[yellow]No .git folder found, skipping[/yellow]")
            return

        installed = set_hooks_from_config(
            config,
            project_root,
            config_path=explicit_path,
            verbose=verbose or config.verbose,
        )
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)
    except GitHooksError as e:
        console.print(f"[red]Was not able to set git hooks:[/red] {escape(str(e))}")
        sys.exit(1)

    console.print(
        Panel(
            f"[green]✓[/green] Successfully set all git hooks\n\n"
            f"Installed: [bold]{', '.join(installed) or 'none'}[/bold]",
            title="git-hooks",
            border_style="green",
        )
    )


@main.command()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def uninstall(verbose: bool) -> None:
    """Remove all git hooks installed by git-hooks."""
    project_root = Path.cwd()
    if verbose:
        console.print(f"[dim]Removing hooks from: {project_root}[/dim]")

    try:
        removed = remove_hooks(project_root, verbose=verbose)
    except GitHooksError as e:
        console.print(f"[red]Was not able to remove git hooks:[/red] {escape(str(e))}")
        sys.exit(1)

    if removed:
        console.print(f"[green]✓[/green] Successfully removed all git hooks ({', '.join(removed)})")
    else:
        console.print("[yellow]No git-hooks managed hooks found[/yellow]")


main.add_command(uninstall, name="remove")


@main.command("run-staged-lint")
@click.argument("hook")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to config file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--auto-restage/--no-auto-restage",
    default=None,
    help="Re-stage files modified by lint commands (overrides configuration)",
)
def run_staged_lint_command(
    hook: str,
    config_path: str | None,
    verbose: bool,
    auto_restage: bool | None,
) -> None:
    """Run staged lint for HOOK; exits non-zero if linting fails."""
    project_root = Path(get_repo_root() or Path.cwd())

    try:
        config = GitHooksConfig.load(
            Path(config_path) if config_path else None,
            project_root=Path.cwd(),
        )
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)

    result = lint_hook(
        hook,
        config,
        project_root,
        verbose=verbose,
        auto_restage=auto_restage,
    )

    if not result.success:
        reason = f" ({result.failure.value})" if result.failure else ""
        console.print(f"[red]✗[/red] Staged lint failed{reason}")
        sys.exit(1)

    if result.restaged_files:
        console.print(f"[green]✓[/green] Re-staged {len(result.restaged_files)} fixed file(s)")
    if verbose:
        console.print("[green]✓[/green] Staged lint passed")


@main.command()
def status() -> None:
    """Show configured and installed hooks."""
    project_root = Path.cwd()

    try:
        config: GitHooksConfig | None = GitHooksConfig.load(project_root=project_root)
    except ConfigError as e:
        console.print(f"[yellow]{escape(str(e))}[/yellow]")
        config = None

    hooks_dir = get_git_hooks_dir(project_root)

    table = Table(title="git-hooks Status")
    table.add_column("Hook", style="cyan")
    table.add_column("Action", style="white")
    table.add_column("Installed", style="green")

    for hook in VALID_GIT_HOOKS:
        action = config.hooks.get(hook) if config else None
        installed = hooks_dir is not None and is_managed_hook(hooks_dir / hook)
        if action is None and not installed:
            continue

        if action is None:
            description = "[dim]not configured[/dim]"
        elif isinstance(action, CommandAction):
            description = escape(action.command)
        else:
            description = f"staged-lint ({len(action.patterns)} pattern(s))"

        table.add_row(hook, description, "✓" if installed else "[red]✗[/red]")

    console.print(table)

    if config and config.staged_lint is not None:
        console.print(f"Global staged-lint: {len(config.staged_lint)} pattern(s)")
    if config and config.source:
        console.print(f"Config file: [bold]{escape(str(config.source))}[/bold]")
    if hooks_dir is None:
        console.print("[yellow]○[/yellow] Not inside a git repository")

    if check_in_dependencies(project_root):
        console.print(f"[green]✓[/green] {DISTRIBUTION_NAME} is declared in pyproject.toml")
    else:
        console.print(f"[yellow]○[/yellow] {DISTRIBUTION_NAME} is not declared in pyproject.toml")


if __name__ == "__main__":
    main()
