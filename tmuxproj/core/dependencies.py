import shutil
from typing import Iterable, List
import structlog

from tmuxproj.exceptions import MissingDependencyError

log = structlog.get_logger(__name__)


def find_missing_tools(tools: Iterable[str]) -> List[str]:
    missing: List[str] = []
    for tool in tools:
        if tool not in missing and shutil.which(tool) is None:
            missing.append(tool)
    return missing


def check_dependencies(tools: Iterable[str]) -> None:
    # raises once with every missing executable so the user can fix them all at once.
    tools = list(tools)
    missing = find_missing_tools(tools)
    if missing:
        log.error("missing_dependencies", missing=missing)
        raise MissingDependencyError(missing)
    log.debug("dependencies_present", tools=tools)
