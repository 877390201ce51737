"""
Tests for pyproject.toml dependency inspection.
"""

from git_hooks.manifest import check_in_dependencies, requirement_name


def _write(tmp_path, text):
    (tmp_path / "pyproject.toml").write_text(text)


class TestRequirementName:
    """Tests for requirement parsing."""

    def test_plain(self):
        assert requirement_name("git-hooks-py") == "git-hooks-py"

    def test_with_specifier_and_marker(self):
        assert requirement_name("Git_Hooks.Py>=0.1; python_version>'3.9'") == "git-hooks-py"

    def test_with_extras(self):
        assert requirement_name("rich[jupyter]>=13") == "rich"


class TestCheckInDependencies:
    """Tests for check_in_dependencies."""

    def test_optional_dependency(self, tmp_path):
        _write(tmp_path, '[project]\nname = "x"\n[project.optional-dependencies]\ndev = ["git-hooks-py"]\n')
        assert check_in_dependencies(tmp_path)

    def test_dependency_group(self, tmp_path):
        _write(tmp_path, '[dependency-groups]\ndev = ["pytest", "git-hooks-py>=0.1"]\n')
        assert check_in_dependencies(tmp_path)

    def test_runtime_dependency_warns(self, tmp_path, caplog):
        _write(tmp_path, '[project]\nname = "x"\ndependencies = ["git-hooks-py"]\n')
        assert check_in_dependencies(tmp_path)
        assert "development extra" in caplog.text

    def test_not_declared(self, tmp_path):
        _write(tmp_path, '[project]\nname = "x"\ndependencies = ["click"]\n')
        assert not check_in_dependencies(tmp_path)

    def test_missing_manifest(self, tmp_path):
        assert not check_in_dependencies(tmp_path)

    def test_invalid_manifest(self, tmp_path):
        _write(tmp_path, "[project\n")
        assert not check_in_dependencies(tmp_path)
