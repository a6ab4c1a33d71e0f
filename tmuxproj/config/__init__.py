# tmuxproj/config/__init__.py
"""
Configuration for tmuxproj: settings dataclasses and the loader that
merges defaults, the user TOML file and environment values.
"""
from .settings import AppConfig, DiscoveryConfig
from .loader import load_app_config

__all__ = ["AppConfig", "DiscoveryConfig", "load_app_config"]
