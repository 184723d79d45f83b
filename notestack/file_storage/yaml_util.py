"""
Reading and atomic writing of YAML files, with an optional key order for mappings.
JSON is valid YAML, so JSON files read the same way.
"""

from pathlib import Path
from typing import Any, Callable, List, Optional

from ruamel.yaml import YAML
from strif import atomic_output_file

KeySort = Callable[[str], tuple]


def _new_yaml(key_sort: Optional[KeySort] = None) -> YAML:
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False

    def represent_dict(dumper, data):
        if key_sort:
            data = {k: data[k] for k in sorted(data.keys(), key=key_sort)}
        return dumper.represent_dict(data)

    yaml.representer.add_representer(dict, represent_dict)
    if key_sort:
        yaml.representer.sort_base_mapping_type_on_output = False

    return yaml


def priority_key_sort(priority_keys: List[str]) -> KeySort:
    """
    Keys in `priority_keys` come first, in that order. Any other keys follow
    alphabetically.
    """
    ranks = {key: i for i, key in enumerate(priority_keys)}

    def sort_func(key: str) -> tuple:
        return (ranks.get(key, len(ranks)), key)

    return sort_func


def read_yaml_file(filename: str | Path) -> Any:
    with open(filename, "r", encoding="utf-8") as f:
        return _new_yaml().load(f)


def write_yaml_file(value: Any, filename: str | Path, key_sort: Optional[KeySort] = None):
    """
    Write the value to a YAML file, replacing it atomically. Parent directories are
    created as needed.
    """
    with atomic_output_file(str(filename), make_parents=True) as tmp_path:
        with open(tmp_path, "w", encoding="utf-8") as f:
            _new_yaml(key_sort).dump(value, f)


## Tests


def test_write_yaml_file_with_priority_keys(tmp_path):
    file_path = tmp_path / "config" / "workspaces.yml"
    data = {"extra": 1, "workspaces": [], "active_workspace_id": "Personal", "another": 2}

    key_sort = priority_key_sort(["workspaces", "active_workspace_id"])
    write_yaml_file(data, file_path, key_sort=key_sort)

    assert list(read_yaml_file(file_path).keys()) == [
        "workspaces",
        "active_workspace_id",
        "another",
        "extra",
    ]


def test_reads_json_file(tmp_path):
    file_path = tmp_path / "workspaces.json"
    file_path.write_text(
        '{"workspaces": [{"id": "a", "shortcut": null}], "active_workspace_id": "a"}',
        encoding="utf-8",
    )
    assert read_yaml_file(file_path) == {
        "workspaces": [{"id": "a", "shortcut": None}],
        "active_workspace_id": "a",
    }
