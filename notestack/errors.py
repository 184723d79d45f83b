"""
Unified hierarchy of error types. These inherit from standard errors like
ValueError and FileExistsError but are more fine-grained.
"""

from typing import Tuple, Type


class NotestackError(ValueError):
    """Base class for notestack runtime errors."""

    pass


class SelfExplanatoryError(NotestackError):
    """Common errors that arise from 'normal' problems that are largely self-explanatory,
    i.e., no stack trace should be necessary when reporting to the user."""

    pass


class InvalidInput(SelfExplanatoryError):
    """Raised when the wrong kind of input is given to an operation."""

    pass


class FileExists(InvalidInput, FileExistsError):
    """Raised when a file already exists."""

    pass


class FileNotFound(InvalidInput, FileNotFoundError):
    """Raised when a file is not found."""

    pass


class NoteNotFound(FileNotFound):
    """Raised when a note path is not in its workspace directory."""

    pass


class WorkspaceNotFound(FileNotFound):
    """Raised when a workspace id is not registered."""

    def __init__(self, workspace_id: str):
        super().__init__(f"Workspace not found: {workspace_id!r}")
        self.workspace_id = workspace_id


class InvalidFilename(InvalidInput):
    """Raised when a filename is invalid."""

    pass


class InvalidOperation(InvalidInput):
    """Raised when an operation can't be performed."""

    pass


class InvalidState(SelfExplanatoryError):
    """Raised when the store or workspace config is not in a valid state for an operation."""

    pass


NONFATAL_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    SelfExplanatoryError,
    FileNotFoundError,
    FileExistsError,
    OSError,
)
"""Exceptions that are not fatal and usually don't merit a full stack trace."""


def is_fatal(exception: Exception) -> bool:
    for e in NONFATAL_EXCEPTIONS:
        if isinstance(exception, e):
            return False
    return True
