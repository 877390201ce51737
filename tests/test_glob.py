"""
Tests for glob pattern matching.
"""

from git_hooks.staged_lint.glob import expand, filter_by_pattern, matches


class TestBraceExpansion:
    """Tests for brace expansion."""

    def test_no_braces(self):
        assert expand("plain") == ["plain"]
        assert expand("*.md") == ["*.md"]

    def test_single_group(self):
        assert expand("**/*.{js,ts}") == ["**/*.js", "**/*.ts"]
        assert len(expand("*.{a,b,c}")) == 3

    def test_group_with_surrounding_text(self):
        assert expand("src/*.{js,ts,jsx,tsx}") == [
            "src/*.js",
            "src/*.ts",
            "src/*.jsx",
            "src/*.tsx",
        ]

    def test_two_groups_cross_product(self):
        assert expand("{src,lib}/*.{js,ts}") == [
            "src/*.js",
            "src/*.ts",
            "lib/*.js",
            "lib/*.ts",
        ]

    def test_options_are_trimmed(self):
        assert expand("*.{js, ts}") == ["*.js", "*.ts"]

    def test_negated_group(self):
        assert expand("!{dist,build}/**") == ["!dist/**", "!build/**"]


class TestMatches:
    """Tests for single-pattern matching."""

    def test_static_pattern_is_equality(self):
        assert matches("README.md", "README.md")
        assert not matches("docs/README.md", "README.md")
        assert not matches("README.mdx", "README.md")

    def test_star_does_not_cross_directories(self):
        assert not matches("a/b.js", "*.js")
        assert matches("a/b.js", "a/*.js")
        assert not matches("src/index.ts", "src/*.js")

    def test_double_star_crosses_directories(self):
        assert matches("a/b.js", "**/*.js")
        assert matches("src/components/Button.tsx", "src/**/*.tsx")
        assert matches("src/components/Button.tsx", "**/*.tsx")

    def test_double_star_slash_matches_root_files(self):
        assert matches("index.js", "**/*.js")
        assert matches("src/x.ts", "src/**/*.ts")
        assert not matches("index.ts", "**/*.js")

    def test_question_mark(self):
        assert matches("a1.js", "a?.js")
        assert not matches("a12.js", "a?.js")
        assert not matches("a/.js", "a?.js")

    def test_full_path_only(self):
        assert not matches("src/index.js.map", "src/*.js")
        assert not matches("lib/src/index.js", "src/*.js")

    def test_regex_metacharacters_are_literal(self):
        assert matches("file(1).txt", "file(1).txt")
        assert not matches("fileX.txt", "file.txt")
        assert matches("a+b.js", "a+b.js")

    def test_negation(self):
        assert not matches("node_modules/lib.js", "!node_modules/**")
        assert matches("src/lib.js", "!node_modules/**")

    def test_negation_inverts(self):
        for path in ["a/b.js", "README.md", "src/x.ts"]:
            for pattern in ["*.js", "**/*.js", "README.md", "src/?.ts"]:
                assert matches(path, "!" + pattern) == (not matches(path, pattern))

    def test_unterminated_bracket_does_not_raise(self):
        assert not matches("src/a.js", "src/[a.js")


class TestFilterByPattern:
    """Tests for filtering file lists."""

    def test_simple_patterns(self):
        files = ["src/index.js", "src/utils.ts", "README.md"]
        assert filter_by_pattern(files, "*.js") == []
        assert filter_by_pattern(files, "src/*.js") == ["src/index.js"]
        assert filter_by_pattern(files, "*.md") == ["README.md"]

    def test_brace_patterns(self):
        files = [
            "src/index.js",
            "src/utils.ts",
            "src/component.jsx",
            "src/types.d.ts",
            "README.md",
            "package.json",
        ]
        assert filter_by_pattern(files, "src/*.{js,ts}") == [
            "src/index.js",
            "src/utils.ts",
            "src/types.d.ts",
        ]
        assert filter_by_pattern(files, "*.{md,json}") == ["README.md", "package.json"]

    def test_double_star_patterns(self):
        files = [
            "src/index.js",
            "src/components/Button.tsx",
            "src/utils/helpers.ts",
            "tests/unit/index.test.js",
            "README.md",
        ]
        assert filter_by_pattern(files, "**/*.js") == ["src/index.js", "tests/unit/index.test.js"]
        assert filter_by_pattern(files, "**/*.{ts,tsx}") == [
            "src/components/Button.tsx",
            "src/utils/helpers.ts",
        ]

    def test_double_star_includes_top_level(self):
        files = ["index.js", "src/a.js", "README.md"]
        assert filter_by_pattern(files, "**/*.js") == ["index.js", "src/a.js"]

    def test_negation_alone_matches_everything_else(self):
        files = ["src/index.js", "src/test.js", "node_modules/lib.js", "dist/bundle.js"]
        assert filter_by_pattern(files, "!node_modules/**") == [
            "src/index.js",
            "src/test.js",
            "dist/bundle.js",
        ]
        assert filter_by_pattern(["src/a.js", "node_modules/b.js"], "!node_modules/**") == [
            "src/a.js"
        ]

    def test_exclude_wins_over_include(self):
        files = ["src/a.js", "dist/b.js", "build/c.js"]
        assert filter_by_pattern(files, "{**/*.js,!dist/**}") == ["src/a.js", "build/c.js"]

    def test_preserves_input_order(self):
        files = ["z.md", "a.md", "m.md"]
        assert filter_by_pattern(files, "*.md") == files
