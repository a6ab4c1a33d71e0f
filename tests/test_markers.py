# tests/test_markers.py
"""Tests for the project root predicate and marker matchers."""

import pytest

from tmuxproj.core.discovery import is_root, build_matchers, ExactNameMatcher, GlobMatcher
from tmuxproj.exceptions import DiscoveryError


class TestMatchers:
    """Tests for the typed marker matchers."""

    def test_exact_name_matcher(self):
        matcher = ExactNameMatcher("package.json")
        assert matcher.matches("package.json") is True
        assert matcher.matches("package.json.bak") is False
        assert matcher.matches("Package.json") is False

    @pytest.mark.parametrize("filename,expected", [
        ("App.sln", True),
        (".sln", True),
        ("App.sln.bak", False),
        ("App.csproj", False),
    ])
    def test_glob_matcher(self, filename, expected):
        assert GlobMatcher("*.sln").matches(filename) is expected

    def test_glob_matcher_rejects_multi_segment_patterns(self):
        with pytest.raises(DiscoveryError):
            GlobMatcher("src/*.sln")

    def test_build_matchers_picks_type_per_pattern(self):
        matchers = build_matchers([".git", "*.sln", "file?.txt", "Makefile"])

        assert [type(m) for m in matchers] == [ExactNameMatcher, GlobMatcher, GlobMatcher, ExactNameMatcher]
        assert [m.pattern for m in matchers] == [".git", "*.sln", "file?.txt", "Makefile"]


class TestIsRoot:
    """Tests for is_root."""

    def test_empty_directory_is_not_root(self, tmp_path):
        assert is_root(tmp_path) is False

    def test_missing_directory_is_not_root(self, tmp_path):
        assert is_root(tmp_path / "missing") is False

    @pytest.mark.parametrize("marker", [
        "package.json", "Cargo.toml", "Makefile", "README.md", ".gitignore", "Dockerfile",
    ])
    def test_marker_file_makes_root(self, tmp_path, marker):
        (tmp_path / marker).write_text("")
        assert is_root(tmp_path) is True

    def test_marker_directory_makes_root(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert is_root(tmp_path) is True

    def test_glob_marker_makes_root(self, tmp_path):
        (tmp_path / "Project.sln").write_text("")
        assert is_root(tmp_path) is True

    def test_markers_in_subdirectories_do_not_count(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "package.json").write_text("{}")
        (tmp_path / "notes.txt").write_text("")
        assert is_root(tmp_path) is False

    def test_custom_marker_list(self, tmp_path):
        (tmp_path / "package.json").write_text("{}")
        assert is_root(tmp_path, markers=["*.nimble"]) is False
        (tmp_path / "thing.nimble").write_text("")
        assert is_root(tmp_path, markers=["*.nimble"]) is True

    def test_reflects_current_directory_contents(self, tmp_path):
        """No caching: the answer changes as soon as the directory does."""
        marker = tmp_path / "go.mod"
        marker.write_text("module x")
        assert is_root(tmp_path) is True
        marker.unlink()
        assert is_root(tmp_path) is False
