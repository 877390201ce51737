"""
Configuration management for git-hooks.

Supports:
- Config file (.git-hooks.toml, git-hooks.toml, .git-hooks.json, git-hooks.json)
- [tool.git-hooks] table in pyproject.toml
- Environment variables (highest priority)

Hook names may be written in kebab-case or camelCase and option keys in
either spelling; everything is normalized here so the rest of the package
only sees canonical hook names and snake_case fields.
"""

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from git_hooks.exceptions import ConfigError
from git_hooks.models import (
    STAGED_LINT_HOOKS,
    VALID_GIT_HOOKS,
    CommandAction,
    HookAction,
    StagedLintAction,
    canonical_hook_name,
)


CONFIG_FILE_NAMES = (
    ".git-hooks.toml",
    "git-hooks.toml",
    ".git-hooks.json",
    "git-hooks.json",
)
PYPROJECT_FILE_NAME = "pyproject.toml"
PYPROJECT_TABLE = "git-hooks"
ENV_PREFIX = "GIT_HOOKS_"

# Accepted spellings -> field name
OPTION_KEYS = {
    "stagedLint": "staged_lint",
    "staged-lint": "staged_lint",
    "staged_lint": "staged_lint",
    "autoRestage": "auto_restage",
    "auto-restage": "auto_restage",
    "auto_restage": "auto_restage",
    "preserveUnused": "preserve_unused",
    "preserve-unused": "preserve_unused",
    "preserve_unused": "preserve_unused",
    "verbose": "verbose",
}

HOOK_OBJECT_KEYS = {"staged_lint", "auto_restage"}

TRUTHY = ("1", "true", "yes")

PatternTable = dict[str, tuple[str, ...]]


@dataclass
class GitHooksConfig:
    """Parsed git-hooks configuration."""

    # Hook name -> what the hook runs
    hooks: dict[str, HookAction] = field(default_factory=dict)

    # Staged-lint map used when a hook has none of its own
    staged_lint: Optional[PatternTable] = None
    auto_restage: Optional[bool] = None

    verbose: bool = False
    preserve_unused: Union[bool, list[str]] = False

    # File the configuration was read from, if any
    source: Optional[Path] = None

    @classmethod
    def load(
        cls,
        config_path: Optional[Path] = None,
        project_root: Optional[Path] = None,
    ) -> "GitHooksConfig":
        """
        Load configuration for a project.

        Priority (highest to lowest):
        1. Environment variables
        2. Explicit config path
        3. First config file found in the project directory

        Raises:
            ConfigError: If no configuration exists or it is malformed
        """
        if config_path is None:
            config_path = cls.find_config_file(project_root)
        if config_path is None:
            raise ConfigError(
                "Config was not found! Add .git-hooks.toml, git-hooks.toml, "
                ".git-hooks.json, git-hooks.json or a [tool.git-hooks] table "
                "in pyproject.toml."
            )

        config = cls.from_dict(cls._read_file(Path(config_path)), source=Path(config_path))

        env_config = cls._load_from_env()
        for name, value in env_config.items():
            setattr(config, name, value)

        return config

    @classmethod
    def find_config_file(cls, project_root: Optional[Path] = None) -> Optional[Path]:
        """Find the config file in the project directory."""
        root = Path(project_root) if project_root else Path.cwd()

        for name in CONFIG_FILE_NAMES:
            candidate = root / name
            if candidate.is_file():
                return candidate

        pyproject = root / PYPROJECT_FILE_NAME
        if pyproject.is_file():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
            except tomllib.TOMLDecodeError:
                return None
            if PYPROJECT_TABLE in data.get("tool", {}):
                return pyproject

        return None

    @classmethod
    def _read_file(cls, path: Path) -> dict[str, Any]:
        """Read a TOML or JSON config file into a plain mapping."""
        try:
            if path.suffix == ".json":
                data = json.loads(path.read_text(encoding="utf-8"))
            else:
                with open(path, "rb") as f:
                    data = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot parse config file {path}: {e}") from e

        if path.name == PYPROJECT_FILE_NAME:
            data = data.get("tool", {}).get(PYPROJECT_TABLE, {})

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a table/object")
        return data

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        source: Optional[Path] = None,
    ) -> "GitHooksConfig":
        """
        Build a config from a raw mapping.

        Raises:
            ConfigError: On unknown keys, empty commands, a staged-lint map
                on a hook other than pre-commit, or badly typed values
        """
        if not data:
            raise ConfigError("Config is empty. Configure at least one git hook.")

        options: dict[str, Any] = {}
        hooks: dict[str, HookAction] = {}

        for key, value in data.items():
            option = OPTION_KEYS.get(key)
            if option is not None:
                if option in options:
                    raise ConfigError(f"Option {key!r} is set more than once")
                options[option] = value
                continue

            hook = canonical_hook_name(key)
            if hook is None:
                raise ConfigError(
                    f"Config was not in correct format: {key!r} is not a git hook or option"
                )
            if hook in hooks:
                raise ConfigError(f"Hook {hook} is configured more than once")
            hooks[hook] = _parse_action(hook, value)

        config = cls(hooks=hooks, source=source)

        if "staged_lint" in options:
            config.staged_lint = _parse_pattern_map(options["staged_lint"], "staged-lint")
        if "auto_restage" in options:
            config.auto_restage = _parse_bool(options["auto_restage"], "autoRestage")
        if "verbose" in options:
            config.verbose = _parse_bool(options["verbose"], "verbose")
        if "preserve_unused" in options:
            config.preserve_unused = _parse_preserve_unused(options["preserve_unused"])

        return config

    @classmethod
    def _load_from_env(cls) -> dict[str, Any]:
        """Load configuration overrides from environment variables."""
        result: dict[str, Any] = {}

        verbose = os.environ.get(f"{ENV_PREFIX}VERBOSE")
        if verbose is not None and verbose.lower() in TRUTHY:
            result["verbose"] = True

        return result

    def preserved_hooks(self) -> set[str]:
        """Hooks whose installed scripts must survive an install."""
        if self.preserve_unused is True:
            return set(VALID_GIT_HOOKS)
        if not self.preserve_unused:
            return set()
        return set(self.preserve_unused)


def _parse_action(hook: str, value: Any) -> HookAction:
    if isinstance(value, str):
        if not value.strip():
            raise ConfigError(f"Command for {hook} is not set")
        return CommandAction(command=value)

    if isinstance(value, Mapping):
        fields: dict[str, Any] = {}
        for key, item in value.items():
            name = OPTION_KEYS.get(key)
            if name not in HOOK_OBJECT_KEYS:
                raise ConfigError(f"Unknown key {key!r} in configuration for {hook}")
            if name in fields:
                raise ConfigError(f"Key {key!r} is set more than once for {hook}")
            fields[name] = item

        if "staged_lint" not in fields:
            raise ConfigError(f"Command for {hook} is not set")
        if hook not in STAGED_LINT_HOOKS:
            raise ConfigError(
                f"staged-lint is only supported for the pre-commit hook, found it on {hook}"
            )

        auto_restage = None
        if "auto_restage" in fields:
            auto_restage = _parse_bool(fields["auto_restage"], f"{hook}.autoRestage")

        return StagedLintAction(
            patterns=_parse_pattern_map(fields["staged_lint"], f"{hook}.staged-lint"),
            auto_restage=auto_restage,
        )

    raise ConfigError(f"Command for {hook} is not set")


def _parse_pattern_map(value: Any, where: str) -> PatternTable:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{where} must map glob patterns to commands")

    patterns: PatternTable = {}
    for pattern, spec in value.items():
        if not isinstance(pattern, str) or not pattern:
            raise ConfigError(f"{where} has an empty glob pattern")

        if isinstance(spec, str):
            commands: tuple[str, ...] = (spec,)
        elif isinstance(spec, (list, tuple)):
            commands = tuple(spec)
        else:
            raise ConfigError(f"{where}: commands for {pattern!r} must be a string or a list")

        if not commands or not all(isinstance(c, str) and c.strip() for c in commands):
            raise ConfigError(f"{where}: commands for {pattern!r} must be non-empty strings")
        patterns[pattern] = commands

    return patterns


def _parse_bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{where} must be true or false")
    return value


def _parse_preserve_unused(value: Any) -> Union[bool, list[str]]:
    if isinstance(value, bool):
        return value
    if not isinstance(value, list):
        raise ConfigError("preserveUnused must be a boolean or a list of hook names")

    hooks = []
    for item in value:
        hook = canonical_hook_name(item) if isinstance(item, str) else None
        if hook is None:
            raise ConfigError(f"preserveUnused contains an unknown hook: {item!r}")
        hooks.append(hook)
    return hooks
