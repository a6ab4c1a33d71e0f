# tmuxproj/core/discovery/markers.py
import os
from pathlib import Path
from typing import Iterable, List, Protocol, Sequence, Tuple
import pathspec
import structlog

from tmuxproj.config.settings import PROJECT_MARKERS
from tmuxproj.exceptions import DiscoveryError

log = structlog.get_logger(__name__)

_GLOB_CHARS = ("*", "?", "[")


class MarkerMatcher(Protocol):
    pattern: str

    def matches(self, filename: str) -> bool:
        ...


class ExactNameMatcher:
    """Matches one entry name exactly, e.g. ``.git`` or ``package.json``."""

    def __init__(self, name: str):
        self.pattern = name

    def matches(self, filename: str) -> bool:
        return filename == self.pattern

    def __repr__(self) -> str:
        return f"ExactNameMatcher({self.pattern!r})"


class GlobMatcher:
    """Matches entry basenames against a single-level glob such as ``*.sln``."""

    def __init__(self, pattern: str):
        if "/" in pattern:
            raise DiscoveryError(f"marker glob must be a single path segment: {pattern!r}")
        self.pattern = pattern
        try:
            self._spec = pathspec.PathSpec.from_lines("gitwildmatch", [pattern])
        except Exception as e:
            raise DiscoveryError(f"error compiling marker glob {pattern!r}: {e}")

    def matches(self, filename: str) -> bool:
        return self._spec.match_file(filename)

    def __repr__(self) -> str:
        return f"GlobMatcher({self.pattern!r})"


def build_matchers(patterns: Iterable[str]) -> Tuple[MarkerMatcher, ...]:
    # picks the matcher type for each marker pattern, keeping the given order.
    matchers: List[MarkerMatcher] = []
    for pattern in patterns:
        if any(ch in pattern for ch in _GLOB_CHARS):
            matchers.append(GlobMatcher(pattern))
        else:
            matchers.append(ExactNameMatcher(pattern))
    return tuple(matchers)


_DEFAULT_MATCHERS = build_matchers(PROJECT_MARKERS)


def any_entry_matches(entry_names: Iterable[str], matchers: Sequence[MarkerMatcher]) -> bool:
    for name in entry_names:
        for matcher in matchers:
            if matcher.matches(name):
                return True
    return False


def is_root(directory: Path, markers: Sequence[str] = PROJECT_MARKERS) -> bool:
    """True iff some entry directly inside ``directory`` matches a project marker.

    Reads the directory listing on every call; a missing or unreadable
    directory is simply not a root.
    """
    matchers = _DEFAULT_MATCHERS if tuple(markers) == PROJECT_MARKERS else build_matchers(markers)
    try:
        entry_names = os.listdir(directory)
    except OSError as e:
        log.debug("is_root_listing_failed", path=str(directory), error=str(e))
        return False
    return any_entry_matches(entry_names, matchers)
