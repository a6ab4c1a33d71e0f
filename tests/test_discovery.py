# tests/test_discovery.py
"""Tests for project root discovery."""

import os
import pytest
from pathlib import Path

from tmuxproj.config.settings import DiscoveryConfig
from tmuxproj.core.discovery import discover
from tmuxproj.exceptions import BaseDirectoryNotFoundError, DiscoveryError


GIT_CONFIG = "[core]\n\trepositoryformatversion = 0\n"


class TestDiscoverScenarios:
    """End-to-end scans over small directory trees."""

    def test_mixed_tree(self, make_tree):
        """Repositories and manifests are found; ignored dirs and plain dirs are not."""
        base = make_tree({
            "proj1/.git/config": GIT_CONFIG,
            "proj2/package.json": "{}",
            "proj3/random.txt": "nothing here",
            "build/.git/config": GIT_CONFIG,
        })

        assert discover(base) == [base / "proj1", base / "proj2"]

    def test_empty_tree_returns_empty_list(self, tmp_path):
        assert discover(tmp_path) == []

    def test_results_are_absolute_and_sorted(self, make_tree):
        base = make_tree({
            "zeta/go.mod": "module zeta",
            "alpha/Cargo.toml": "[package]",
            "mid/sub/pyproject.toml": "[project]",
        })

        result = discover(base)

        assert all(p.is_absolute() for p in result)
        assert result == sorted(result, key=str)
        assert result == [base / "alpha", base / "mid" / "sub", base / "zeta"]

    def test_idempotent(self, make_tree):
        base = make_tree({
            "a/.git/config": GIT_CONFIG,
            "b/package.json": "{}",
            "c/d/Gemfile": "source 'https://rubygems.org'",
        })

        assert discover(base) == discover(base)


class TestRepositoryRoots:
    """Tests for the .git/config signal and subtree exclusion."""

    def test_repo_with_manifest_reported_once(self, make_tree):
        base = make_tree({
            "app/.git/config": GIT_CONFIG,
            "app/package.json": "{}",
        })

        assert discover(base) == [base / "app"]

    def test_nested_repositories_collapse_to_outer(self, make_tree):
        base = make_tree({
            "repoA/.git/config": GIT_CONFIG,
            "repoA/nested/.git/config": GIT_CONFIG,
        })

        assert discover(base) == [base / "repoA"]

    def test_manifests_inside_repository_not_reported(self, make_tree):
        base = make_tree({
            "mono/.git/config": GIT_CONFIG,
            "mono/packages/web/package.json": "{}",
            "mono/packages/api/go.mod": "module api",
        })

        assert discover(base) == [base / "mono"]

    def test_git_dir_without_config_is_not_a_repository_signal(self, make_tree):
        """A bare .git directory still verifies but is not picked up by the scan."""
        base = make_tree({
            "half/.git/HEAD": "ref: refs/heads/main",
            "half/sub/package.json": "{}",
        })

        assert discover(base) == [base / "half" / "sub"]

    def test_base_dir_repository_keeps_scanning_children(self, make_tree):
        base = make_tree({
            ".git/config": GIT_CONFIG,
            "services/api/pyproject.toml": "[project]",
        })

        assert discover(base) == [base, base / "services" / "api"]

    def test_repository_inside_hidden_directory_is_found(self, make_tree):
        base = make_tree({".dotfiles/.git/config": GIT_CONFIG})

        assert discover(base) == [base / ".dotfiles"]


class TestIgnoreSet:
    """Tests for pruning of ignored directory names."""

    @pytest.mark.parametrize("ignored", ["node_modules", "vendor", ".venv", "target"])
    def test_default_ignored_dirs_are_pruned(self, make_tree, ignored):
        base = make_tree({
            f"{ignored}/lib/.git/config": GIT_CONFIG,
            f"{ignored}/pkg/package.json": "{}",
            "real/package.json": "{}",
        })

        assert discover(base) == [base / "real"]

    def test_ignored_name_pruned_at_any_depth(self, make_tree):
        base = make_tree({
            "proj/src/node_modules/dep/package.json": "{}",
            "proj/src/node_modules/dep/.git/config": GIT_CONFIG,
            "proj/package.json": "{}",
        })

        assert discover(base) == [base / "proj"]

    def test_custom_ignore_set_replaces_defaults(self, make_tree):
        base = make_tree({
            "build/.git/config": GIT_CONFIG,
            "skipme/package.json": "{}",
        })
        config = DiscoveryConfig(ignore_dirs=["skipme"])

        assert discover(base, config) == [base / "build"]

    def test_base_dir_with_ignored_name_is_still_scanned(self, make_tree):
        """Only descendants are pruned, never the base directory itself."""
        base = make_tree({"build/proj/package.json": "{}"}) / "build"

        assert discover(base) == [base / "proj"]


class TestBaseDirectory:
    """Tests for base directory handling."""

    def test_base_dir_included_when_it_is_a_project(self, make_tree):
        base = make_tree({"README.md": "# readme", "notes/todo.txt": "x"})

        assert discover(base) == [base]

    def test_base_dir_with_glob_marker(self, make_tree):
        base = make_tree({"Solution.sln": ""})

        assert discover(base) == [base]

    def test_accepts_string_and_relative_paths(self, make_tree, monkeypatch):
        base = make_tree({"code/app/package.json": "{}"})
        monkeypatch.chdir(base)

        assert discover("code") == [base / "code" / "app"]

    def test_missing_base_dir_raises(self, tmp_path):
        with pytest.raises(BaseDirectoryNotFoundError) as exc_info:
            discover(tmp_path / "does-not-exist")

        assert "does not exist" in str(exc_info.value)
        assert isinstance(exc_info.value, DiscoveryError)

    def test_file_as_base_dir_raises(self, make_tree):
        base = make_tree({"file.txt": "x"})

        with pytest.raises(BaseDirectoryNotFoundError):
            discover(base / "file.txt")


class TestVerificationAndOptions:
    """Tests for candidate re-verification, hidden dirs and symlinks."""

    def test_strong_marker_candidates_must_pass_verification(self, make_tree):
        base = make_tree({
            "odd/weird.manifest": "",
            "fine/package.json": "{}",
        })
        config = DiscoveryConfig(strong_markers=["weird.manifest", "package.json"])

        assert discover(base, config) == [base / "fine"]

    def test_manifests_under_hidden_dirs_skipped_by_default(self, make_tree):
        base = make_tree({
            ".config/tool/package.json": "{}",
            "visible/package.json": "{}",
        })

        assert discover(base) == [base / "visible"]

    def test_manifests_under_hidden_dirs_with_include_hidden(self, make_tree):
        base = make_tree({
            ".config/tool/package.json": "{}",
            "visible/package.json": "{}",
        })
        config = DiscoveryConfig(include_hidden=True)

        assert discover(base, config) == [base / ".config" / "tool", base / "visible"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlink_loop_terminates_when_following_links(self, make_tree):
        base = make_tree({"app/package.json": "{}"})
        (base / "app" / "loop").symlink_to(base, target_is_directory=True)
        config = DiscoveryConfig(follow_symlinks=True)

        assert discover(base, config) == [base / "app"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_symlinked_projects_not_followed_by_default(self, make_tree, tmp_path_factory):
        outside = tmp_path_factory.mktemp("outside")
        (outside / "lib").mkdir()
        (outside / "lib" / "package.json").write_text("{}")
        base = make_tree({"local/package.json": "{}"})
        (base / "linked").symlink_to(outside / "lib", target_is_directory=True)

        assert discover(base) == [base / "local"]
        assert discover(base, DiscoveryConfig(follow_symlinks=True)) == [base / "linked", base / "local"]
