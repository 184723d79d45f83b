from notestack.file_storage.numbering import max_ordering_key, next_number

from tests.conftest import make_notes


def test_next_number_empty(notes_dir):
    assert next_number(notes_dir) == 1


def test_next_number_missing_dir(tmp_path):
    assert next_number(tmp_path / "nope") == 1


def test_next_number_ignores_unnumbered(notes_dir):
    make_notes(
        notes_dir,
        {
            "3-a.md": "",
            "7-b.md": "",
            "1700000000000.md": "",
            "readme.md": "",
            "-x.md": "",
            "abc-12.md": "",
        },
    )
    assert max_ordering_key(notes_dir) == 7
    assert next_number(notes_dir) == 8


def test_next_number_counts_other_extensions(notes_dir):
    make_notes(notes_dir, {"2-a.md": "", "10-attachment.png": ""})
    assert next_number(notes_dir) == 11


def test_next_number_gaps(notes_dir):
    make_notes(notes_dir, {"1-a.md": "", "40-b.md": ""})
    assert next_number(notes_dir) == 41
