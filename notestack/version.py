import tomllib
from importlib import metadata
from pathlib import Path


def get_pyproject_version() -> str:
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    pyproject_data = tomllib.loads(pyproject_path.read_text())
    return pyproject_data["project"]["version"]


def get_version() -> str:
    try:
        # Get the version from the installed package metadata.
        return metadata.version("notestack")
    except metadata.PackageNotFoundError:
        # For development: use the pyproject version.
        return get_pyproject_version()


if __name__ == "__main__":
    print(get_version())
