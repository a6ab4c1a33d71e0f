# tmuxproj/core/discovery/__init__.py
"""
Project discovery for tmuxproj.

This package finds project roots below a base directory: version-control
roots first, then directories holding a package manifest, all verified
against the project marker list.
"""
from .walker import discover
from .markers import is_root, build_matchers, ExactNameMatcher, GlobMatcher
from .path_resolution import resolve_base_dir, to_display_path, from_display_path

__all__ = [
    "discover",
    "is_root",
    "build_matchers",
    "ExactNameMatcher",
    "GlobMatcher",
    "resolve_base_dir",
    "to_display_path",
    "from_display_path",
]
