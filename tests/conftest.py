import os
from pathlib import Path
from typing import Dict, List

import pytest

from notestack.config.settings import (
    CONFIG_PATH_ENV,
    NOTES_ROOT_ENV,
    reset_global_settings,
    update_global_settings,
)
from notestack.workspaces.workspace_registry import reset_workspace_registry


@pytest.fixture(autouse=True)
def settings(tmp_path, monkeypatch):
    """
    Keep every test's notes, config and logs inside its own tmp directory.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv(NOTES_ROOT_ENV, raising=False)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    reset_global_settings()
    with update_global_settings() as settings:
        settings.notes_root = tmp_path / "Notes"
        settings.config_path = tmp_path / "data" / "workspaces.yml"
    reset_workspace_registry()
    yield settings
    reset_workspace_registry()
    monkeypatch.undo()
    reset_global_settings()


@pytest.fixture
def notes_dir(tmp_path) -> Path:
    path = tmp_path / "Notes" / "Personal"
    path.mkdir(parents=True)
    return path


def make_notes(notes_dir: Path, files: Dict[str, str]) -> None:
    for name, content in files.items():
        (notes_dir / name).write_text(content, encoding="utf-8")


def names(notes_dir: Path) -> List[str]:
    return sorted(p.name for p in notes_dir.iterdir())


def set_mtime(path: Path, seconds: int) -> None:
    os.utime(path, (seconds, seconds))
