import os
import threading
from pathlib import Path
from typing import Optional

from ruamel.yaml.error import YAMLError

from notestack.config.logger import get_logger
from notestack.config.settings import global_settings
from notestack.errors import FileExists, InvalidOperation, WorkspaceNotFound
from notestack.file_storage.migration import move_loose_notes
from notestack.file_storage.note_store import get_note_store
from notestack.file_storage.persisted_yaml import PersistedYaml
from notestack.util.format_utils import fmt_path
from notestack.workspaces.workspace_config import (
    CONFIG_KEY_SORT,
    default_config,
    Workspace,
    WorkspaceConfig,
)
from notestack.workspaces.workspace_names import workspace_dir, workspace_id_for

log = get_logger(__name__)


class WorkspaceRegistry:
    """
    Owns the workspace config: the list of workspaces and which one is active.

    The config is guarded by a lock held only while it is read or replaced. Note
    operations take the lock just long enough to look up the active directory, so
    slow filesystem work never blocks config access. Mutations are saved first and
    only then become visible, so the in-memory config always matches the file.
    """

    def __init__(self, notes_root: Path, config_path: Path, default_name: str):
        self.notes_root = Path(notes_root)
        self.default_name = default_name
        self._persisted = PersistedYaml(config_path, key_sort=CONFIG_KEY_SORT)
        self._lock = threading.RLock()
        self._config = WorkspaceConfig()

    def __str__(self):
        return f"WorkspaceRegistry({fmt_path(self.notes_root)})"

    @property
    def config_path(self) -> Path:
        return self._persisted.filename

    def load(self) -> "WorkspaceRegistry":
        """
        Load the config, creating the default workspace on first use, then migrate legacy
        notes in every workspace directory that exists.
        """
        with self._lock:
            if self._persisted.exists():
                config = self._read_config()
            else:
                config = self._bootstrap()
            self._config = self._repair(config)
            ids = self._config.ids()

        for workspace_id in ids:
            get_note_store(self.workspace_dir(workspace_id)).migrate()

        return self

    def _read_config(self) -> WorkspaceConfig:
        try:
            return WorkspaceConfig.from_dict(self._persisted.read())
        except (OSError, ValueError, TypeError, YAMLError) as e:
            log.warning(
                "Could not read workspace config, starting empty: %s: %s",
                fmt_path(self.config_path),
                e,
            )
            return WorkspaceConfig()

    def _bootstrap(self) -> WorkspaceConfig:
        """
        First run: put any notes from the pre-workspace layout (Markdown files directly in
        the notes root) into the default workspace and save a config for it.
        """
        config = default_config(self.default_name)
        try:
            personal_dir = self.workspace_dir(self.default_name)
            if self.notes_root.is_dir():
                move_loose_notes(self.notes_root, personal_dir)
            else:
                os.makedirs(personal_dir, exist_ok=True)
            self._persisted.set(config.to_dict())
            log.message("Created workspace config: %s", fmt_path(self.config_path))
        except OSError as e:
            log.warning("Could not set up default workspace, using it unsaved: %s", e)
        return config

    def _repair(self, config: WorkspaceConfig) -> WorkspaceConfig:
        """
        Make sure there is at least one workspace and the active id points at one.
        """
        if not config.workspaces:
            log.warning("No workspaces in config, adding default workspace: %s", self.default_name)
            config = default_config(self.default_name)
        elif not config.get(config.active_workspace_id):
            log.warning(
                "Active workspace %r not found, switching to %r",
                config.active_workspace_id,
                config.workspaces[0].id,
            )
            config.active_workspace_id = config.workspaces[0].id
        return config

    def _commit(self, config: WorkspaceConfig) -> None:
        self._persisted.set(config.to_dict())
        self._config = config

    def workspace_dir(self, workspace_id: str) -> Path:
        return workspace_dir(workspace_id, self.notes_root)

    def active_workspace_id(self) -> str:
        with self._lock:
            return self._config.active_workspace_id

    def active_dir(self) -> Path:
        return self.workspace_dir(self.active_workspace_id())

    def get_workspaces(self) -> WorkspaceConfig:
        with self._lock:
            return self._config.copy()

    def set_active(self, workspace_id: str) -> None:
        with self._lock:
            config = self._config.copy()
            if not config.get(workspace_id):
                raise WorkspaceNotFound(workspace_id)
            config.active_workspace_id = workspace_id
            self._commit(config)
        log.info("Active workspace: %s", workspace_id)

    def create(self, name: str) -> Workspace:
        workspace_id = workspace_id_for(name)
        with self._lock:
            config = self._config.copy()
            if config.get(workspace_id):
                raise FileExists(f"Workspace already exists: {workspace_id!r}")

            os.makedirs(self.workspace_dir(workspace_id), exist_ok=True)

            workspace = Workspace(id=workspace_id, name=name, shortcut=config.next_shortcut())
            config.workspaces.append(workspace)
            self._commit(config)

        log.message("Created workspace: %s (%s)", name, workspace_id)
        return workspace

    def delete(self, workspace_id: str) -> None:
        """
        Remove a workspace from the config. Its directory and notes stay on disk.
        """
        with self._lock:
            config = self._config.copy()
            if len(config.workspaces) <= 1:
                raise InvalidOperation("Cannot delete the last workspace")
            workspace = config.get(workspace_id)
            if not workspace:
                raise WorkspaceNotFound(workspace_id)

            config.workspaces.remove(workspace)
            if config.active_workspace_id == workspace_id:
                config.active_workspace_id = config.workspaces[0].id
            self._commit(config)

        log.message("Deleted workspace: %s", workspace_id)

    def rename(self, workspace_id: str, new_name: str) -> Workspace:
        """
        Change a workspace's display name. The id (and directory) stay the same.
        """
        with self._lock:
            config = self._config.copy()
            workspace = config.get(workspace_id)
            if not workspace:
                raise WorkspaceNotFound(workspace_id)
            workspace.name = new_name
            self._commit(config)

        log.info("Renamed workspace %s: %s", workspace_id, new_name)
        return workspace


_registry: Optional[WorkspaceRegistry] = None
_registry_lock = threading.RLock()


def get_workspace_registry() -> WorkspaceRegistry:
    """
    The process-wide registry, loaded from the global settings on first use.
    """
    global _registry
    with _registry_lock:
        if _registry is None:
            settings = global_settings()
            _registry = WorkspaceRegistry(
                settings.notes_root, settings.config_path, settings.default_workspace_name
            ).load()
        return _registry


def reset_workspace_registry() -> None:
    """
    Forget the loaded registry, e.g. after the settings change.
    """
    global _registry
    with _registry_lock:
        _registry = None
