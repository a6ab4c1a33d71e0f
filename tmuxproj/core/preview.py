# tmuxproj/core/preview.py
"""Text rendered in the picker's preview pane."""
import os
from pathlib import Path
from typing import List
import click
import structlog

from tmuxproj.config.settings import DEFAULT_PREVIEW_ENTRY_LIMIT
from tmuxproj.core.discovery.markers import is_root
from tmuxproj.core.discovery.path_resolution import BASE_DISPLAY_PATH, from_display_path
from tmuxproj.core.interfaces import SessionManager
from tmuxproj.core.picker import CREATE_SESSION_ENTRY

log = structlog.get_logger(__name__)


def _list_entries(directory: Path, limit: int) -> List[str]:
    # directories first, then files, each group sorted by name.
    with os.scandir(directory) as entries:
        listed = [(not entry.is_dir(), entry.name) for entry in entries]
    listed.sort()
    lines = [f"  {name}/" if not is_file else f"  {name}" for is_file, name in listed[:limit]]
    if len(listed) > limit:
        lines.append(f"  ... ({len(listed) - limit} more)")
    return lines


def render_directory_preview(
    display_path: str, base_dir: Path, limit: int = DEFAULT_PREVIEW_ENTRY_LIMIT
) -> str:
    directory = from_display_path(display_path, base_dir)
    if display_path.strip() == BASE_DISPLAY_PATH:
        lines = [click.style(f"Base Directory: {directory}", fg="green")]
    else:
        lines = [click.style(f"Directory: {directory}", fg="green")]

    if is_root(directory):
        lines.append(click.style("[PROJECT ROOT]", fg="yellow", bold=True))

    lines.append("Contents:")
    try:
        lines.extend(_list_entries(directory, limit))
    except FileNotFoundError:
        lines.append("  (directory not found)")
    except OSError as e:
        log.debug("preview_listing_failed", path=str(directory), error=str(e))
        lines.append(f"  (cannot list directory: {e.strerror})")
    return "\n".join(lines)


def render_session_preview(name: str, store: SessionManager) -> str:
    if name == CREATE_SESSION_ENTRY:
        return "\n".join([
            click.style("Create a new tmux session", fg="green"),
            "Press Enter to create a new session",
        ])
    lines = [click.style(f"Session: {name}", fg="green"), "Windows:"]
    windows = store.list_windows(name)
    if windows:
        lines.extend(f"  {window}" for window in windows)
    else:
        lines.append("  No windows found")
    return "\n".join(lines)
