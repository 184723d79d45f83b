from dataclasses import asdict, field
from typing import Any, Dict, List, Optional

from pydantic.dataclasses import dataclass

from notestack.errors import InvalidState
from notestack.file_storage.yaml_util import priority_key_sort

SHORTCUTS = [str(n) for n in range(1, 10)]

CONFIG_KEY_SORT = priority_key_sort(["workspaces", "active_workspace_id"])


@dataclass
class Workspace:
    id: str
    """Directory name under the notes root. Never changes after creation."""

    name: str
    """Display name."""

    shortcut: Optional[str] = None
    """A single digit for quick switching, if one was free."""


@dataclass
class WorkspaceConfig:
    workspaces: List[Workspace] = field(default_factory=list)
    active_workspace_id: str = ""

    def get(self, workspace_id: str) -> Optional[Workspace]:
        return next((w for w in self.workspaces if w.id == workspace_id), None)

    def ids(self) -> List[str]:
        return [w.id for w in self.workspaces]

    def next_shortcut(self) -> Optional[str]:
        used = {w.shortcut for w in self.workspaces}
        return next((s for s in SHORTCUTS if s not in used), None)

    def copy(self) -> "WorkspaceConfig":
        return WorkspaceConfig.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, value: Optional[Dict[str, Any]]) -> "WorkspaceConfig":
        value = value or {}
        if not isinstance(value, dict):
            raise InvalidState(f"Workspace config should be a mapping, got: {type(value).__name__}")
        return cls(
            workspaces=[Workspace(**w) for w in value.get("workspaces") or []],
            active_workspace_id=value.get("active_workspace_id") or "",
        )


def default_config(name: str) -> WorkspaceConfig:
    return WorkspaceConfig(
        workspaces=[Workspace(id=name, name=name, shortcut=SHORTCUTS[0])],
        active_workspace_id=name,
    )


## Tests


def test_config_round_trip():
    config = default_config("Personal")
    config.workspaces.append(Workspace(id="work", name="Work", shortcut=config.next_shortcut()))
    value = config.to_dict()
    assert value == {
        "workspaces": [
            {"id": "Personal", "name": "Personal", "shortcut": "1"},
            {"id": "work", "name": "Work", "shortcut": "2"},
        ],
        "active_workspace_id": "Personal",
    }
    assert WorkspaceConfig.from_dict(value) == config


def test_next_shortcut():
    config = WorkspaceConfig()
    assert config.next_shortcut() == "1"
    for s in SHORTCUTS:
        config.workspaces.append(Workspace(id=f"w{s}", name=s, shortcut=s))
    assert config.next_shortcut() is None
    config.workspaces[3].shortcut = None
    assert config.next_shortcut() == "4"
