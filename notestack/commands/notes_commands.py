"""
One operation per behavior the store offers to a UI or the CLI. Note operations on
the active workspace look up its directory from the registry and then work on the
filesystem without holding the config lock.
"""

from pathlib import Path
from typing import List

from notestack.file_storage.note_store import get_note_store, NoteEntry
from notestack.workspaces.workspace_config import Workspace, WorkspaceConfig
from notestack.workspaces.workspace_registry import get_workspace_registry


def _active_store():
    return get_note_store(get_workspace_registry().active_dir())


def _store_for(path: str | Path):
    return get_note_store(Path(path).parent)


## Notes


def ensure_notes_dir() -> Path:
    return _active_store().ensure_dir()


def list_notes() -> List[NoteEntry]:
    return _active_store().list_notes()


def read_note(path: str | Path) -> str:
    return _store_for(path).read(path)


def write_note(path: str | Path, content: str) -> Path:
    return _store_for(path).write(path, content)


def create_note() -> Path:
    return _active_store().create()


def delete_note(path: str | Path) -> None:
    _store_for(path).delete(path)


def rename_note(path: str | Path, new_name: str) -> Path:
    return _store_for(path).rename(path, new_name)


def reorder_note(path: str | Path, new_index: int) -> Path:
    return _active_store().reorder(path, new_index)


## Workspaces


def get_workspaces() -> WorkspaceConfig:
    return get_workspace_registry().get_workspaces()


def set_active_workspace(workspace_id: str) -> None:
    get_workspace_registry().set_active(workspace_id)


def create_workspace(name: str) -> Workspace:
    return get_workspace_registry().create(name)


def delete_workspace(workspace_id: str) -> None:
    get_workspace_registry().delete(workspace_id)


def rename_workspace(workspace_id: str, new_name: str) -> Workspace:
    return get_workspace_registry().rename(workspace_id, new_name)
