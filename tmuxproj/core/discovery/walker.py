# tmuxproj/core/discovery/walker.py
import os
from pathlib import Path
from typing import List, Optional, Set, Tuple, Union
import structlog

from tmuxproj.config.settings import DiscoveryConfig, VCS_DIR_NAME, VCS_MARKER_FILE
from tmuxproj.core.discovery.markers import build_matchers, any_entry_matches, is_root
from tmuxproj.core.discovery.path_resolution import resolve_base_dir

log = structlog.get_logger(__name__)


def _is_vcs_root(directory: str, subdirs: List[str]) -> bool:
    if VCS_DIR_NAME not in subdirs:
        return False
    return os.path.isfile(os.path.join(directory, VCS_DIR_NAME, VCS_MARKER_FILE))


def _is_under_hidden_dir(rel_parts: Tuple[str, ...]) -> bool:
    return any(part.startswith(".") and part not in (".", "..") for part in rel_parts)


def discover(base_dir: Union[str, Path], config: Optional[DiscoveryConfig] = None) -> List[Path]:
    """Finds project roots at or below ``base_dir``.

    A directory holding ``.git/config`` is a repository root and its subtree
    is not searched further (unless it is the base directory itself). Outside
    repositories, a directory holding a package manifest is a root. Ignored
    directory names are pruned at every depth. Every candidate is verified
    with ``is_root`` before it is returned.

    Returns a sorted, deduplicated list of absolute paths. Raises
    BaseDirectoryNotFoundError when ``base_dir`` cannot be scanned.
    """
    config = config or DiscoveryConfig()
    base = resolve_base_dir(base_dir)
    ignore_set = config.ignore_set
    strong_matchers = build_matchers(config.strong_markers)

    log.info(
        "discovery_started",
        base_dir=str(base),
        ignore_count=len(ignore_set),
        follow_symlinks=config.follow_symlinks,
    )

    candidates: Set[Path] = set()
    visited_dirs: Set[Tuple[int, int]] = set()

    def _on_walk_error(error: OSError):
        log.warning("discovery_directory_unreadable", path=error.filename, error=error.strerror)

    for root, dirs, files in os.walk(
        str(base), topdown=True, onerror=_on_walk_error, followlinks=config.follow_symlinks
    ):
        if config.follow_symlinks:
            try:
                stat_result = os.stat(root)
            except OSError as e:
                log.debug("discovery_stat_failed", path=root, error=str(e))
                dirs[:] = []
                continue
            dir_key = (stat_result.st_dev, stat_result.st_ino)
            if dir_key in visited_dirs:
                log.debug("discovery_symlink_loop_skipped", path=root)
                dirs[:] = []
                continue
            visited_dirs.add(dir_key)

        root_path = Path(root)
        is_base = root_path == base

        if _is_vcs_root(root, dirs):
            log.debug("vcs_root_found", path=root)
            candidates.add(root_path)
            if not is_base:
                dirs[:] = []
                continue

        # repository metadata is never a project.
        dirs[:] = [d for d in dirs if d != VCS_DIR_NAME and d not in ignore_set]

        if any_entry_matches(files, strong_matchers):
            rel_parts = root_path.relative_to(base).parts
            if config.include_hidden or not _is_under_hidden_dir(rel_parts):
                log.debug("manifest_root_found", path=root)
                candidates.add(root_path)

    if is_root(base, config.markers):
        candidates.add(base)

    verified = sorted(
        (path for path in candidates if path.is_dir() and is_root(path, config.markers)),
        key=str,
    )
    dropped = len(candidates) - len(verified)
    if dropped:
        log.debug("discovery_candidates_dropped_on_verification", count=dropped)

    log.info("discovery_finished", base_dir=str(base), count=len(verified))
    return verified
