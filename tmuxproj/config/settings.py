from dataclasses import dataclass, field
from typing import List, Tuple
import structlog

log = structlog.get_logger(__name__)

# directory basenames pruned from discovery at any depth below the base dir.
DEFAULT_IGNORE_DIRS: Tuple[str, ...] = (
    "node_modules",
    "target",
    "build",
    "dist",
    ".git",
    ".svn",
    ".hg",
    "vendor",
    "__pycache__",
    ".pytest_cache",
    ".venv",
    "venv",
    ".env",
    "coverage",
    ".nyc_output",
    ".next",
    ".nuxt",
    ".cache",
    "tmp",
    "temp",
    "logs",
    ".DS_Store",
    "Thumbs.db",
    ".idea",
    ".vscode",
    ".vs",
    "bin",
    "obj",
    ".gradle",
    ".mvn",
    "out",
    ".terraform",
)

# entries whose presence directly inside a directory marks it as a project root.
PROJECT_MARKERS: Tuple[str, ...] = (
    ".git",
    ".svn",
    ".hg",
    "package.json",
    "Cargo.toml",
    "go.mod",
    "pyproject.toml",
    "setup.py",
    "pom.xml",
    "build.gradle",
    "Makefile",
    "CMakeLists.txt",
    "composer.json",
    "Gemfile",
    "mix.exs",
    ".project",
    "*.sln",
    "tsconfig.json",
    "deno.json",
    "requirements.txt",
    "Pipfile",
    "yarn.lock",
    "package-lock.json",
    "Dockerfile",
    "docker-compose.yml",
    "README.md",
    "README.rst",
    "README.txt",
    ".gitignore",
)

# package manifests that mark a project root on their own, outside of any repository.
STRONG_MARKERS: Tuple[str, ...] = (
    "package.json",
    "Cargo.toml",
    "go.mod",
    "pyproject.toml",
    "pom.xml",
    "build.gradle",
    "composer.json",
    "Gemfile",
    "mix.exs",
)

VCS_DIR_NAME = ".git"
VCS_MARKER_FILE = "config"

DEFAULT_EDITOR = "nvim"
DEFAULT_RIGHT_PANE_WIDTH = 25
DEFAULT_PREVIEW_WIDTH = 50
DEFAULT_PREVIEW_ENTRY_LIMIT = 15

IGNORE_DIRS_ENV_VAR = "PROJECT_IGNORE_DIRS"
PREVIEW_WIDTH_ENV_VAR = "PREVIEW_WIDTH"
CONFIG_PATH_ENV_VAR = "TMUXPROJ_CONFIG"


def parse_ignore_dirs(raw_value: str) -> List[str]:
    # splits a newline-separated override into an ordered, deduplicated list.
    seen = set()
    names: List[str] = []
    for line in raw_value.splitlines():
        name = line.strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return names


@dataclass
class DiscoveryConfig:
    # holds everything the directory scan needs; passed explicitly into discover().
    ignore_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))
    markers: List[str] = field(default_factory=lambda: list(PROJECT_MARKERS))
    strong_markers: List[str] = field(default_factory=lambda: list(STRONG_MARKERS))
    follow_symlinks: bool = False
    include_hidden: bool = False

    @property
    def ignore_set(self) -> frozenset:
        return frozenset(self.ignore_dirs)


@dataclass
class AppConfig:
    # holds all configuration parameters for a single run.
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    editor: str = DEFAULT_EDITOR
    right_pane_width: int = DEFAULT_RIGHT_PANE_WIDTH
    preview_width: int = DEFAULT_PREVIEW_WIDTH

    def __post_init__(self):
        for attr in ("right_pane_width", "preview_width"):
            value = getattr(self, attr)
            if not 1 <= value <= 99:
                log.warning("pane_width_out_of_range_clamped", field=attr, value=value)
                setattr(self, attr, min(max(value, 1), 99))
