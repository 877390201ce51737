"""
Auto-restaging of files modified by lint commands.

Content is snapshotted before the first pass. Afterwards, files whose
working-tree content differs from the snapshot are re-added to the index
and the pattern map is run once more in check-only mode.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

from git_hooks.hooks.git import add_to_index, list_staged_files, read_working_file, snapshot_content
from git_hooks.models import FailureKind, PatternMap, StagedLintResult
from git_hooks.staged_lint.dispatcher import PatternDispatcher

logger = logging.getLogger(__name__)


class RestageCoordinator:
    """Tracks content changes made during a run and restages them."""

    def __init__(
        self,
        project_root: Union[str, Path],
        auto_restage: bool = True,
        verbose: bool = False,
    ):
        self.project_root = Path(project_root)
        self.auto_restage = auto_restage
        self.verbose = verbose
        self.snapshot: dict[str, bytes] = {}

    def capture(self, staged_files: Sequence[str]) -> None:
        """Snapshot the staged content of every file before linting."""
        self.snapshot = snapshot_content(self.project_root, staged_files)

    def modified_files(self) -> list[str]:
        """Files whose working-tree content no longer matches the snapshot."""
        modified = []
        for file, original in self.snapshot.items():
            current = read_working_file(self.project_root, file)
            if current is not None and current != original:
                modified.append(file)
        return modified

    def settle(
        self,
        dispatcher: PatternDispatcher,
        pattern_map: PatternMap,
        result: StagedLintResult,
    ) -> StagedLintResult:
        """
        Handle modifications after a successful first pass.

        With auto-restage on, modified files are staged in one batch and the
        pattern map is re-run with ``--fix`` flags stripped; a failure there
        fails the run. With auto-restage off, a warning is logged instead.

        Raises:
            RestageError: If the modified files could not be staged
        """
        modified = self.modified_files()
        result.modified_files = modified
        if not modified:
            return result

        if not self.auto_restage:
            logger.warning(
                f"Lint modified {len(modified)} file(s) but auto-restaging is disabled."
            )
            logger.warning(f"Modified files: {', '.join(modified)}")
            logger.warning("Stage these files manually and commit again.")
            return result

        self._log(f"Auto-restaging {len(modified)} modified file(s): {', '.join(modified)}")
        add_to_index(self.project_root, modified)
        result.restaged_files = modified

        validation = dispatcher.run(
            pattern_map,
            list_staged_files(self.project_root),
            check_only=True,
        )
        result.results.extend(validation.results)

        if not validation.success:
            logger.error(
                "Validation failed after auto-restaging: fixes were applied and staged "
                f'but pattern "{validation.failed_pattern}" still reports problems'
            )
            result.success = False
            result.failure = FailureKind.VALIDATION
        return result

    def _log(self, message: str) -> None:
        if self.verbose:
            logger.info(f"[staged-lint] {message}")
