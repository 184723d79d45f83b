import shlex
from pathlib import Path
from textwrap import indent
from typing import Any, Iterable


def fmt_lines(values: Iterable[Any], prefix: str = "    ", line_break: str = "\n") -> str:
    """
    Simple indented or prefixed formatting of values one per line.
    """
    return indent(line_break.join(str(value) for value in values), prefix).rstrip()


def fmt_path(path: str | Path, resolve: bool = True) -> str:
    """
    Format a path or filename for display. This quotes it if it contains whitespace.

    :param resolve: If true paths are resolved. If they are within the current working
    directory, they are formatted as relative. Otherwise, they are formatted as absolute.
    """
    if resolve:
        path = Path(path).resolve()
        cwd = Path.cwd().resolve()
        if path.is_relative_to(cwd):
            path = path.relative_to(cwd)
    else:
        path = Path(path)

    return shlex.quote(str(path))


## Tests


def test_fmt_lines():
    assert fmt_lines(["a", "b"]) == "    a\n    b"
    assert fmt_lines([1, 2], prefix="- ") == "- 1\n- 2"


def test_fmt_path():
    assert fmt_path("my notes/1-a.md", resolve=False) == "'my notes/1-a.md'"
    assert fmt_path("notes/1-a.md", resolve=False) == "notes/1-a.md"
