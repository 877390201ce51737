"""
Shared fixtures for git-hooks tests.
"""

from __future__ import annotations

import shlex
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

FIXER_SCRIPT = '''
import sys

for name in sys.argv[1:]:
    if name.startswith("--"):
        continue
    with open(name, "w") as f:
        f.write("fixed\\n")
'''

STRICT_SCRIPT = '''
import sys

files = [a for a in sys.argv[1:] if not a.startswith("--")]
if "--fix" in sys.argv:
    for name in files:
        with open(name, "w") as f:
            f.write("fixed\\n")
    sys.exit(0)
sys.exit(1)
'''


def git(repo: Path, *args: str) -> str:
    """Run a git command in a test repository."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """Create an empty git repository with one commit."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.name", "test")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("# test\n")
    git(repo, "add", "README.md")
    git(repo, "commit", "-q", "-m", "initial")
    return repo


@pytest.fixture
def stage(git_repo):
    """Write files into the test repository and stage them."""

    def _stage(files: dict[str, str]) -> None:
        for name, content in files.items():
            path = git_repo / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        git(git_repo, "add", *files)

    return _stage


@pytest.fixture
def scripts(tmp_path):
    """Helper scripts living outside the repository."""
    script_dir = tmp_path / "scripts"
    script_dir.mkdir()
    (script_dir / "fixer.py").write_text(FIXER_SCRIPT)
    (script_dir / "strict.py").write_text(STRICT_SCRIPT)

    python = shlex.quote(sys.executable)
    return {
        "fixer": f"{python} {shlex.quote(str(script_dir / 'fixer.py'))}",
        "strict": f"{python} {shlex.quote(str(script_dir / 'strict.py'))}",
        "fail": f'{python} -c "import sys; sys.exit(1)"',
        "pass": f'{python} -c "import sys; sys.exit(0)"',
    }
