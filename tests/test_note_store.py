import pytest

from notestack.errors import FileExists, InvalidFilename, NoteNotFound
from notestack.file_storage.note_store import get_note_store, NoteStore

from tests.conftest import make_notes, names, set_mtime


def test_list_notes_order(notes_dir):
    make_notes(
        notes_dir,
        {
            "2-two.md": "# Two\n",
            "10-ten.md": "intro\n# Ten\n",
            "old.md": "# Old\n",
            "older.md": "no title",
            "3-three.txt": "not a note",
        },
    )
    set_mtime(notes_dir / "old.md", 2_000_000)
    set_mtime(notes_dir / "older.md", 1_000_000)
    (notes_dir / "5-folder.md").mkdir()

    entries = NoteStore(notes_dir).list_notes()

    assert [e.name for e in entries] == ["10-ten", "2-two", "old", "older"]
    assert [e.title for e in entries] == ["Ten", "Two", "Old", "Untitled"]
    assert [e.ordering_key for e in entries] == [10, 2, None, None]
    assert entries[2].modified == 2_000_000
    assert entries[0].to_dict()["path"] == str(notes_dir / "10-ten.md")


def test_list_notes_missing_dir(tmp_path):
    assert NoteStore(tmp_path / "missing").list_notes() == []


def test_list_notes_reads_bounded_prefix(notes_dir):
    make_notes(notes_dir, {"1-a.md": "x" * 500 + "\n# Late Title\n"})
    assert NoteStore(notes_dir, title_read_bytes=200).list_notes()[0].title == "Untitled"
    assert NoteStore(notes_dir, title_read_bytes=1000).list_notes()[0].title == "Late Title"


def test_create(notes_dir):
    make_notes(notes_dir, {"4-a.md": "# A"})
    store = NoteStore(notes_dir)

    path = store.create()

    assert path == notes_dir / "5-untitled.md"
    assert path.read_text() == "\n"
    assert store.create() == notes_dir / "6-untitled.md"


def test_create_makes_dir(tmp_path):
    store = NoteStore(tmp_path / "Notes" / "new")
    assert store.create() == tmp_path / "Notes" / "new" / "1-untitled.md"


def test_write_renames_to_title(notes_dir):
    make_notes(notes_dir, {"3-untitled.md": "\n"})
    store = NoteStore(notes_dir)

    new_path = store.write(notes_dir / "3-untitled.md", "# Shopping List\n- eggs\n")

    assert new_path == notes_dir / "3-shopping-list.md"
    assert names(notes_dir) == ["3-shopping-list.md"]
    assert store.read(new_path) == "# Shopping List\n- eggs\n"


def test_write_same_slug_keeps_path(notes_dir):
    make_notes(notes_dir, {"3-shopping.md": "# Shopping\n"})
    store = NoteStore(notes_dir)

    new_path = store.write(notes_dir / "3-shopping.md", "# Shopping\nmore")
    assert new_path == notes_dir / "3-shopping.md"
    assert store.write(notes_dir / "3-shopping.md", "# SHOPPING!\n") == notes_dir / "3-shopping.md"


def test_write_title_removed_goes_untitled(notes_dir):
    make_notes(notes_dir, {"3-shopping.md": "# Shopping\n"})
    new_path = NoteStore(notes_dir).write(notes_dir / "3-shopping.md", "no heading")
    assert new_path == notes_dir / "3-untitled.md"


def test_write_skips_rename_on_collision(notes_dir):
    make_notes(notes_dir, {"3-untitled.md": "\n", "3-plans.md": "# Plans\n"})
    store = NoteStore(notes_dir)

    path = store.write(notes_dir / "3-untitled.md", "# Plans\nsecond copy")

    assert path == notes_dir / "3-untitled.md"
    assert (notes_dir / "3-untitled.md").read_text() == "# Plans\nsecond copy"
    assert (notes_dir / "3-plans.md").read_text() == "# Plans\n"


def test_write_unnumbered_never_renamed(notes_dir):
    make_notes(notes_dir, {"scratch.md": ""})
    path = NoteStore(notes_dir).write(notes_dir / "scratch.md", "# Big Ideas\n")
    assert path == notes_dir / "scratch.md"
    assert names(notes_dir) == ["scratch.md"]


def test_read_missing(notes_dir):
    with pytest.raises(NoteNotFound):
        NoteStore(notes_dir).read(notes_dir / "1-nope.md")


def test_delete(notes_dir):
    make_notes(notes_dir, {"1-a.md": ""})
    store = NoteStore(notes_dir)
    store.delete(notes_dir / "1-a.md")
    assert names(notes_dir) == []
    with pytest.raises(NoteNotFound):
        store.delete(notes_dir / "1-a.md")


def test_rename(notes_dir):
    make_notes(notes_dir, {"1-a.md": "# A", "2-b.md": "# B"})
    store = NoteStore(notes_dir)

    assert store.rename(notes_dir / "1-a.md", "1-alpha") == notes_dir / "1-alpha.md"
    with pytest.raises(FileExists):
        store.rename(notes_dir / "1-alpha.md", "2-b")
    with pytest.raises(NoteNotFound):
        store.rename(notes_dir / "9-x.md", "9-y")
    with pytest.raises(InvalidFilename):
        store.rename(notes_dir / "2-b.md", "../escape")
    assert names(notes_dir) == ["1-alpha.md", "2-b.md"]


def test_relative_paths_resolve_in_dir(notes_dir):
    make_notes(notes_dir, {"1-a.md": "# A"})
    assert NoteStore(notes_dir).read("1-a.md") == "# A"


def test_get_note_store_is_shared_across_path_spellings(notes_dir, monkeypatch):
    monkeypatch.chdir(notes_dir.parent)

    store = get_note_store("Personal")

    assert store is get_note_store(notes_dir)
    assert store is get_note_store(notes_dir / ".." / "Personal")
    assert store.notes_dir == notes_dir.resolve()
