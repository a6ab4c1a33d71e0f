# tests/conftest.py
import logging
from pathlib import Path
from typing import Dict, Optional

import pytest


def create_tree(base: Path, structure: Dict[str, Optional[str]]) -> Path:
    """Creates files (str content) and empty directories (None) under base."""
    for rel_path, content in structure.items():
        target = base / rel_path
        if content is None:
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
    return base


@pytest.fixture
def make_tree(tmp_path: Path):
    def _make(structure: Dict[str, Optional[str]]) -> Path:
        return create_tree(tmp_path, structure)
    return _make


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Keeps the user's config file and environment out of the tests."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("TMUXPROJ_CONFIG", str(config_dir / "absent.toml"))
    monkeypatch.delenv("PROJECT_IGNORE_DIRS", raising=False)
    monkeypatch.delenv("PREVIEW_WIDTH", raising=False)
    monkeypatch.delenv("TMUX", raising=False)
    yield
    # handlers configured by CLI tests point at CliRunner streams that are closed by now.
    logging.getLogger("tmuxproj").handlers.clear()
