import os
import threading
from contextlib import contextmanager
from enum import Enum
from logging import DEBUG, ERROR, INFO, WARNING
from pathlib import Path

from pydantic.dataclasses import dataclass


APP_NAME = "notestack"

NOTES_DIR_NAME = "Notes"

CONFIG_FILE_NAME = "workspaces.yml"

DEFAULT_WORKSPACE_NAME = "Personal"

TITLE_READ_BYTES = 200

NOTES_ROOT_ENV = "NOTESTACK_NOTES_ROOT"
CONFIG_PATH_ENV = "NOTESTACK_CONFIG"


def _home_or_cwd() -> Path:
    """
    The user's home directory, or the current directory if there is no usable home.
    """
    try:
        return Path.home()
    except RuntimeError:
        return Path(".").absolute()


def default_notes_root() -> Path:
    env_root = os.environ.get(NOTES_ROOT_ENV)
    if env_root:
        return Path(env_root).expanduser()
    home = _home_or_cwd()
    documents = home / "Documents"
    return (documents if documents.is_dir() else home) / NOTES_DIR_NAME


def default_data_dir() -> Path:
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data).expanduser() if xdg_data else _home_or_cwd() / ".local" / "share"
    return base / APP_NAME


def default_config_path() -> Path:
    env_config = os.environ.get(CONFIG_PATH_ENV)
    if env_config:
        return Path(env_config).expanduser()
    return default_data_dir() / CONFIG_FILE_NAME


class LogLevel(Enum):
    debug = DEBUG
    info = INFO
    warning = WARNING
    message = WARNING  # Same as warning, just for important console messages.
    error = ERROR

    def __str__(self):
        return self.name


@dataclass
class Settings:
    notes_root: Path
    """Root directory holding one subdirectory per workspace."""

    config_path: Path
    """The YAML file recording all workspaces and the active one."""

    log_dir: Path
    """Directory for the log file."""

    default_workspace_name: str
    """Name (and id) of the workspace created on first use."""

    title_read_bytes: int
    """How much of each note to read when extracting titles for a listing."""

    console_log_level: LogLevel
    """The log level for console-based logging."""

    file_log_level: LogLevel
    """The log level for file-based logging."""


def default_settings() -> Settings:
    return Settings(
        notes_root=default_notes_root(),
        config_path=default_config_path(),
        log_dir=default_data_dir() / "logs",
        default_workspace_name=DEFAULT_WORKSPACE_NAME,
        title_read_bytes=TITLE_READ_BYTES,
        file_log_level=LogLevel.info,
        console_log_level=LogLevel.warning,
    )


# Initial default settings.
_settings = default_settings()


def global_settings() -> Settings:
    """
    Read access to global settings.
    """
    return _settings


_settings_lock = threading.RLock()


@contextmanager
def update_global_settings():
    """
    Context manager for thread-safe updates to global settings.
    """
    with _settings_lock:
        yield _settings


def reset_global_settings() -> Settings:
    """
    Go back to the defaults, re-reading the environment.
    """
    global _settings
    with _settings_lock:
        _settings = default_settings()
        return _settings
