"""
Pattern dispatch: run lint commands against the staged files each glob selects.
"""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from git_hooks.models import CommandResult, DispatchResult, PatternMap, as_command_list
from git_hooks.staged_lint.glob import filter_by_pattern

logger = logging.getLogger(__name__)

FILES_PLACEHOLDER = "{files}"

# A standalone --fix or --fix=<value> token and the blanks before it
_FIX_FLAG = re.compile(r"[ \t]*(?<!\S)--fix(?:=\S*)?(?!\S)")


def build_command(command: str, files: Sequence[str]) -> str:
    """
    Insert the file list into a command.

    The first ``{files}`` placeholder is replaced; without one the files are
    appended. Each path is shell-quoted, which leaves ordinary paths as-is.
    """
    file_args = " ".join(shlex.quote(f) for f in files)
    if FILES_PLACEHOLDER in command:
        return command.replace(FILES_PLACEHOLDER, file_args, 1)
    return f"{command} {file_args}"


def strip_fix_flags(command: str) -> str:
    """Remove ``--fix`` style flags so a command only checks."""
    return _FIX_FLAG.sub("", command).strip()


def run_command(
    command: str,
    files: Sequence[str],
    project_root: Union[str, Path],
    timeout: Optional[float] = None,
) -> CommandResult:
    """
    Run one shell command against a set of files.

    Args:
        command: Shell command, optionally containing ``{files}``
        files: Files to pass to the command
        project_root: Working directory for the command
        timeout: Seconds before the command is killed (None waits forever)

    Returns:
        CommandResult with exit status and captured output
    """
    final_command = build_command(command, files)
    try:
        result = subprocess.run(
            final_command,
            shell=True,
            capture_output=True,
            text=True,
            errors="replace",
            cwd=project_root,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        return CommandResult(
            command=command,
            files=list(files),
            returncode=-1,
            stdout=_decode(e.stdout),
            stderr=f"Command timed out after {timeout}s",
            timed_out=True,
        )
    except OSError as e:
        return CommandResult(command=command, files=list(files), returncode=-1, stderr=str(e))

    return CommandResult(
        command=command,
        files=list(files),
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def _decode(output: Union[str, bytes, None]) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


class PatternDispatcher:
    """
    Runs a pattern map against a list of staged files.

    Patterns are processed in mapping order and the commands of each pattern
    in list order. The first failing command stops the pass. A pattern that
    matches no files never runs its commands.

    Usage:
        dispatcher = PatternDispatcher("/path/to/repo", verbose=True)
        result = dispatcher.run({"**/*.py": "ruff check --fix"}, staged_files)
    """

    def __init__(
        self,
        project_root: Union[str, Path],
        verbose: bool = False,
        timeout: Optional[float] = None,
    ):
        self.project_root = Path(project_root)
        self.verbose = verbose
        self.timeout = timeout

    def run(
        self,
        pattern_map: PatternMap,
        staged_files: Sequence[str],
        check_only: bool = False,
    ) -> DispatchResult:
        """
        Dispatch every pattern entry.

        Args:
            pattern_map: Glob pattern -> command or list of commands
            staged_files: Files currently staged
            check_only: Strip ``--fix`` flags before running (validation pass)

        Returns:
            DispatchResult; ``failed_pattern`` is set on the first failure
        """
        outcome = DispatchResult()

        for pattern, spec in pattern_map.items():
            matched = filter_by_pattern(staged_files, pattern)
            if not matched:
                self._log(f'No files match pattern "{pattern}" - skipping')
                continue

            self._log(f'Pattern "{pattern}" matched {len(matched)} file(s)')
            self._log(f"Matched files: {', '.join(matched)}")

            for command in as_command_list(spec):
                if check_only:
                    command = strip_fix_flags(command)

                result = self._execute(command, matched)
                outcome.results.append(result)
                if not result.passed:
                    outcome.failed_pattern = pattern
                    return outcome

        return outcome

    def _execute(self, command: str, files: list[str]) -> CommandResult:
        self._log(f"Running command on {len(files)} file(s): {command}")
        self._log(f"Full command: {build_command(command, files)}")

        result = run_command(command, files, self.project_root, timeout=self.timeout)

        if result.passed:
            if result.stdout.strip():
                self._log(result.stdout.rstrip())
            self._log(f"Command completed successfully for {len(files)} file(s)")
            return result

        if result.stdout.strip():
            logger.error(f"Command stdout:\n{result.stdout.rstrip()}")
        if result.stderr.strip():
            logger.error(f"Command stderr:\n{result.stderr.rstrip()}")
        logger.error(f"Command failed: {command}")
        logger.error(f"Failed on files: {', '.join(files)}")
        return result

    def _log(self, message: str) -> None:
        if self.verbose:
            logger.info(f"[staged-lint] {message}")


def dispatch(
    pattern_map: PatternMap,
    staged_files: Sequence[str],
    project_root: Union[str, Path],
    verbose: bool = False,
) -> bool:
    """Run a pattern map once and report whether every matched command passed."""
    return PatternDispatcher(project_root, verbose=verbose).run(pattern_map, staged_files).success
