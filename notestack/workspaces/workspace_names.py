from pathlib import Path

from notestack.config.settings import global_settings
from notestack.errors import InvalidInput
from notestack.util.slugs import slugify


def workspace_id_for(name: str) -> str:
    """
    Id (and directory name) for a new workspace with the given display name.
    """
    workspace_id = slugify(name)
    if not workspace_id:
        raise InvalidInput(f"Invalid workspace name: {name!r}")
    return workspace_id


def workspace_dir(workspace_id: str, notes_root: Path | None = None) -> Path:
    """
    Directory of a workspace. Doesn't check that it exists.
    """
    return Path(notes_root or global_settings().notes_root) / workspace_id


## Tests


def test_workspace_id_for():
    import pytest

    assert workspace_id_for("Work Notes") == "work-notes"
    assert workspace_id_for("Café") == "café"
    with pytest.raises(InvalidInput):
        workspace_id_for("!!!")
    with pytest.raises(InvalidInput):
        workspace_id_for("")


def test_workspace_dir():
    assert workspace_dir("work", Path("/notes")) == Path("/notes/work")
