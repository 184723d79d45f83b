"""
Markdown note content conventions: the title is the first `# ` heading line.
"""

from pathlib import Path
from typing import Tuple

from notestack.util.slugs import slug_or_untitled, UNTITLED_SLUG

UNTITLED_TITLE = "Untitled"

TITLE_PREFIX = "# "


def _lines(content: str):
    return [line.removesuffix("\r") for line in content.split("\n")]


def parse_title(content: str) -> str:
    """
    Text of the first line starting with `# `, or "Untitled". Deeper headings
    (`## ...`) don't count.
    """
    for line in _lines(content):
        if line.startswith(TITLE_PREFIX):
            return line.removeprefix(TITLE_PREFIX)
    return UNTITLED_TITLE


def title_slug(title: str) -> str:
    if not title or title == UNTITLED_TITLE:
        return UNTITLED_SLUG
    return slug_or_untitled(title)


def read_title(path: Path, max_bytes: int) -> str:
    """
    Title from the first `max_bytes` of a file, so listings don't read whole notes.
    Unreadable files are "Untitled".
    """
    try:
        with open(path, "rb") as f:
            head = f.read(max_bytes)
    except OSError:
        return UNTITLED_TITLE
    return parse_title(head.decode("utf-8", errors="replace"))


def parse_content(content: str) -> Tuple[str, str]:
    """
    Split note content into `(title, body)`, where the body is everything except the
    title line. With no title line the title is empty and the body is the whole text.
    """
    lines = content.split("\n")
    for i, line in enumerate(lines):
        if line.startswith(TITLE_PREFIX):
            title = line.removeprefix(TITLE_PREFIX).removesuffix("\r")
            body = "\n".join(lines[:i] + lines[i + 1 :])
            return title, body
    return "", content


def build_content(title: str, body: str) -> str:
    return f"{TITLE_PREFIX}{title}\n{body}"


## Tests


def test_parse_title():
    assert parse_title("# Hello World\nBody text") == "Hello World"
    assert parse_title("# My Note") == "My Note"
    assert parse_title("Some intro\n# Title Here\nBody") == "Title Here"
    assert parse_title("# Windows\r\nline") == "Windows"


def test_parse_title_untitled():
    assert parse_title("No heading here") == UNTITLED_TITLE
    assert parse_title("") == UNTITLED_TITLE
    assert parse_title("## Not a title") == UNTITLED_TITLE
    assert parse_title("#NoSpace") == UNTITLED_TITLE


def test_title_slug():
    assert title_slug("Groceries for Sunday") == "groceries-for-sunday"
    assert title_slug(UNTITLED_TITLE) == UNTITLED_SLUG
    assert title_slug("") == UNTITLED_SLUG
    assert title_slug("???") == UNTITLED_SLUG


def test_parse_and_build_content():
    assert parse_content("# Title\nline 1\nline 2") == ("Title", "line 1\nline 2")
    assert parse_content("intro\n# Title\nrest") == ("Title", "intro\nrest")
    assert parse_content("just text") == ("", "just text")
    assert build_content("Title", "body") == "# Title\nbody"
    assert parse_content(build_content("A title", "x\ny")) == ("A title", "x\ny")
