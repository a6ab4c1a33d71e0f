# tmuxproj/config/loader.py
"""
Handles loading of configuration from the user TOML file and the environment.

Precedence, lowest first: built-in defaults, the user config file,
environment variables. CLI flags are applied on top by the caller.
"""
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import toml
import structlog

from tmuxproj.exceptions import ConfigError

from .settings import (
    AppConfig,
    DiscoveryConfig,
    CONFIG_PATH_ENV_VAR,
    IGNORE_DIRS_ENV_VAR,
    PREVIEW_WIDTH_ENV_VAR,
    parse_ignore_dirs,
)

log = structlog.get_logger(__name__)

USER_CONFIG_DIR = Path.home() / ".config" / "tmuxproj"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

# format: "config_file_key": ("section", "attribute_name")
CONFIG_KEY_MAP: Dict[str, tuple] = {
    "ignore_dirs": ("discovery", "ignore_dirs"),
    "follow_symlinks": ("discovery", "follow_symlinks"),
    "hidden": ("discovery", "include_hidden"),
    "editor": ("app", "editor"),
    "right_pane_width": ("app", "right_pane_width"),
    "preview_width": ("app", "preview_width"),
}

_EXPECTED_TYPES: Dict[str, tuple] = {
    "ignore_dirs": (list,),
    "follow_symlinks": (bool,),
    "hidden": (bool,),
    "editor": (str,),
    "right_pane_width": (int,),
    "preview_width": (int,),
}


def resolve_config_path(env: Mapping[str, str]) -> Path:
    override = env.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return USER_CONFIG_FILE


def load_toml_settings(file_path: Path) -> Dict[str, Any]:
    """Loads settings from a TOML file.

    A missing file yields an empty dict. A file that cannot be parsed
    raises ConfigError, as does a known key with a value of the wrong type.
    """
    if not file_path.is_file():
        log.debug("config_file_not_present", path=str(file_path))
        return {}
    log.debug("loading_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Could not parse config file {file_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {file_path}: {e}") from e

    settings: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in CONFIG_KEY_MAP:
            log.warning("unknown_config_key_ignored", key=key, path=str(file_path))
            continue
        expected = _EXPECTED_TYPES[key]
        # bool is a subclass of int; a width of `true` is a mistake.
        if not isinstance(value, expected) or (bool not in expected and isinstance(value, bool)):
            raise ConfigError(
                f"Config key '{key}' in {file_path} must be of type {expected[0].__name__}"
            )
        if key == "ignore_dirs" and not all(isinstance(item, str) for item in value):
            raise ConfigError(f"Config key 'ignore_dirs' in {file_path} must be a list of strings")
        settings[key] = value
    log.info("config_file_loaded", path=str(file_path), keys=sorted(settings))
    return settings


def load_app_config(
    env: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> AppConfig:
    # builds the effective AppConfig from defaults, the TOML file and the environment.
    env = os.environ if env is None else env
    path = config_path if config_path is not None else resolve_config_path(env)
    file_settings = load_toml_settings(path)

    discovery_kwargs: Dict[str, Any] = {}
    app_kwargs: Dict[str, Any] = {}
    for key, value in file_settings.items():
        section, attr = CONFIG_KEY_MAP[key]
        target = discovery_kwargs if section == "discovery" else app_kwargs
        target[attr] = value

    if "ignore_dirs" in discovery_kwargs:
        discovery_kwargs["ignore_dirs"] = parse_ignore_dirs("\n".join(discovery_kwargs["ignore_dirs"]))

    ignore_override = env.get(IGNORE_DIRS_ENV_VAR, "")
    if ignore_override.strip():
        discovery_kwargs["ignore_dirs"] = parse_ignore_dirs(ignore_override)
        log.info("ignore_dirs_overridden_from_env", count=len(discovery_kwargs["ignore_dirs"]))

    preview_width = env.get(PREVIEW_WIDTH_ENV_VAR)
    if preview_width:
        try:
            app_kwargs["preview_width"] = int(preview_width)
        except ValueError:
            log.warning("invalid_preview_width_env_ignored", value=preview_width)

    return AppConfig(discovery=DiscoveryConfig(**discovery_kwargs), **app_kwargs)
