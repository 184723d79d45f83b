from pathlib import Path
from typing import Any, Optional

from notestack.file_storage.yaml_util import KeySort, read_yaml_file, write_yaml_file


class PersistedYaml:
    """
    Maintain simple data (such as a dictionary or list of strings) as a YAML file.
    File writes are atomic but does not lock.
    """

    def __init__(self, filename: str | Path, key_sort: Optional[KeySort] = None):
        self.filename = Path(filename)
        self.key_sort = key_sort

    def exists(self) -> bool:
        return self.filename.exists()

    def read(self) -> Any:
        return read_yaml_file(self.filename)

    def set(self, value: Any):
        write_yaml_file(value, self.filename, key_sort=self.key_sort)
