"""
Note filename conventions.

Current notes are named `{number}-{slug}.md`, where the leading number is the
ordering key (higher sorts first). Notes from before ordering keys existed are
named by their creation time as a bare millisecond timestamp, e.g. `1700000000000.md`.
There is no index file: the filename is the only record of a note's position.
"""

import re
from pathlib import Path
from typing import Optional

from notestack.util.slugs import SEPARATOR, UNTITLED_SLUG

NOTE_EXT = "md"

NOTE_SUFFIX = f".{NOTE_EXT}"

MAX_ORDERING_KEY = 2**64 - 1

LEGACY_STEM_MIN_LEN = 10

_DIGITS_RE = re.compile(r"[0-9]+")


def is_note_file(path: Path) -> bool:
    return path.suffix == NOTE_SUFFIX


def parse_ordering_key(stem: str) -> Optional[int]:
    """
    Ordering key of a filename stem: the number before the first `-`, or None if
    there is no `-` or the prefix isn't an unsigned 64-bit number.

    "42-my-note" -> 42
    "hello" -> None
    "-test" -> None
    "abc-123" -> None
    """
    number_str, sep, _rest = stem.partition(SEPARATOR)
    if not sep or not _DIGITS_RE.fullmatch(number_str):
        return None
    number = int(number_str)
    if number > MAX_ORDERING_KEY:
        return None
    return number


def format_stem(number: int, slug: str) -> str:
    return f"{number}{SEPARATOR}{slug}"


def format_filename(number: int, slug: str) -> str:
    return f"{format_stem(number, slug)}{NOTE_SUFFIX}"


def slug_of_stem(stem: str) -> str:
    """
    The slug part of a numbered stem, i.e. everything after the first `-`, kept as-is
    when a note is renumbered.
    """
    _number, _sep, slug = stem.partition(SEPARATOR)
    return slug or UNTITLED_SLUG


def is_legacy_stem(stem: str) -> bool:
    """
    Legacy notes are named by a millisecond Unix timestamp.
    """
    return len(stem) >= LEGACY_STEM_MIN_LEN and bool(_DIGITS_RE.fullmatch(stem))


def is_legacy_note(path: Path) -> bool:
    return is_note_file(path) and is_legacy_stem(path.stem)


## Tests


def test_parse_ordering_key_valid():
    assert parse_ordering_key("1-hello") == 1
    assert parse_ordering_key("42-my-note") == 42
    assert parse_ordering_key("100-test") == 100
    assert parse_ordering_key("0-zero") == 0
    assert parse_ordering_key("7-") == 7


def test_parse_ordering_key_invalid():
    assert parse_ordering_key("hello") is None
    assert parse_ordering_key("abc-123") is None
    assert parse_ordering_key("-test") is None
    assert parse_ordering_key("1700000000000") is None
    assert parse_ordering_key("1.5-x") is None
    assert parse_ordering_key(f"{MAX_ORDERING_KEY + 1}-too-big") is None
    assert parse_ordering_key(f"{MAX_ORDERING_KEY}-max") == MAX_ORDERING_KEY


def test_format_filename():
    assert format_filename(3, "groceries") == "3-groceries.md"
    stem = format_stem(12, "a-b-c")
    assert parse_ordering_key(stem) == 12
    assert slug_of_stem(stem) == "a-b-c"
    assert slug_of_stem("5") == UNTITLED_SLUG
    assert slug_of_stem("5-") == UNTITLED_SLUG


def test_is_legacy_stem():
    assert is_legacy_stem("1704067200000")
    assert is_legacy_stem("1234567890")
    assert not is_legacy_stem("123")
    assert not is_legacy_stem("abc1234567")
    assert not is_legacy_stem("12-hello")
    assert is_legacy_note(Path("notes/1700000000000.md"))
    assert not is_legacy_note(Path("notes/1700000000000.txt"))
