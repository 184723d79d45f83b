"""
Slugs for note filenames and workspace ids.

Unlike `python-slugify`, nothing is transliterated or dropped: every character
that is not a letter or number becomes a separator, so "Café" stays "café" and
"don't" becomes "don-t".
"""

import regex

SEPARATOR = "-"

UNTITLED_SLUG = "untitled"

_NON_ALNUM_RE = regex.compile(r"[^\p{Alphabetic}\p{N}]+")


def slugify(text: str) -> str:
    """
    Lower-case the text and collapse every run of non-alphanumeric characters into a
    single `-`, with no leading or trailing separator. Total and idempotent.
    May return an empty string (see `slug_or_untitled`).
    """
    return _NON_ALNUM_RE.sub(SEPARATOR, text.lower()).strip(SEPARATOR)


def slug_or_untitled(text: str) -> str:
    return slugify(text) or UNTITLED_SLUG


## Tests


def test_slugify_basic():
    assert slugify("Hello World") == "hello-world"
    assert slugify("My Note") == "my-note"
    assert slugify("Hello! World?") == "hello-world"
    assert slugify("Test@#$%Name") == "test-name"


def test_slugify_separators():
    assert slugify("Hello   World") == "hello-world"
    assert slugify("A--B--C") == "a-b-c"
    assert slugify("  Hello  ") == "hello"
    assert slugify("---test---") == "test"
    assert slugify("snake_case") == "snake-case"


def test_slugify_unicode():
    assert slugify("Café") == "café"
    assert slugify("日本語") == "日本語"
    assert slugify("Ünïcödé Tïtle") == "ünïcödé-tïtle"


def test_slugify_empty():
    assert slugify("") == ""
    assert slugify("!!! ???") == ""
    assert slug_or_untitled("***") == UNTITLED_SLUG
    assert slug_or_untitled("Groceries") == "groceries"


def test_slugify_idempotent():
    samples = ["Hello World", "  --x-- ", "Café au lait!", "a__b", "2024: plans", "日本 語", ""]
    for text in samples:
        slug = slugify(text)
        assert slugify(slug) == slug
        assert not slug.startswith(SEPARATOR)
        assert not slug.endswith(SEPARATOR)
        assert SEPARATOR * 2 not in slug
