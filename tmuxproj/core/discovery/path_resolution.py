import os
from pathlib import Path
from typing import Union
import structlog

from tmuxproj.exceptions import BaseDirectoryNotFoundError

log = structlog.get_logger(__name__)

BASE_DISPLAY_PATH = "."


def expand_user_path(raw_path: Union[str, Path]) -> Path:
    # expands a leading ~ the way a shell would.
    return Path(os.path.expanduser(str(raw_path)))


def resolve_base_dir(raw_path: Union[str, Path]) -> Path:
    # turns user input into an absolute, existing, readable directory.
    expanded = expand_user_path(raw_path)
    try:
        resolved = expanded.resolve(strict=True)
    except (FileNotFoundError, RuntimeError):
        raise BaseDirectoryNotFoundError(str(expanded)) from None
    except OSError as e:
        raise BaseDirectoryNotFoundError(str(expanded), reason=e.strerror) from e

    if not resolved.is_dir():
        raise BaseDirectoryNotFoundError(str(expanded), reason="not a directory")
    if not os.access(resolved, os.R_OK | os.X_OK):
        raise BaseDirectoryNotFoundError(str(expanded), reason="not readable")

    log.debug("base_dir_resolved", raw=str(raw_path), resolved=str(resolved))
    return resolved


def to_display_path(path: Path, base_dir: Path) -> str:
    # base-relative form shown in the picker; the base itself is ".".
    if path == base_dir:
        return BASE_DISPLAY_PATH
    try:
        return path.relative_to(base_dir).as_posix()
    except ValueError:
        return str(path)


def from_display_path(display_path: str, base_dir: Path) -> Path:
    display_path = display_path.strip()
    if display_path in ("", BASE_DISPLAY_PATH):
        return base_dir
    candidate = Path(display_path)
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate
