from pathlib import Path

import pytest

from notestack.errors import FileExists
from notestack.file_storage.migration import (
    legacy_notes,
    migrate_legacy_note,
    migrate_legacy_notes,
    move_loose_notes,
)

from tests.conftest import make_notes, names


def test_migrates_in_chronological_order(notes_dir):
    # Written newest first so directory order doesn't happen to match.
    make_notes(notes_dir, {"1700000000500.md": "# B\n", "1700000000000.md": "# A\n"})

    migrate_legacy_notes(notes_dir)

    assert names(notes_dir) == ["1-a.md", "2-b.md"]
    assert (notes_dir / "1-a.md").read_text() == "# A\n"


def test_migration_continues_numbering(notes_dir):
    make_notes(
        notes_dir,
        {
            "4-existing.md": "# Existing\n",
            "1600000000000.md": "no title here",
            "1600000000001.md": "## Only a subheading\n# Real Title!",
        },
    )

    migrate_legacy_notes(notes_dir)

    assert names(notes_dir) == ["4-existing.md", "5-untitled.md", "6-real-title.md"]


def test_migration_leaves_other_files(notes_dir):
    make_notes(notes_dir, {"123.md": "# Short\n", "1700000000000.txt": "x", "notes.md": "# N"})

    migrate_legacy_notes(notes_dir)

    assert names(notes_dir) == ["123.md", "1700000000000.txt", "notes.md"]


def test_legacy_notes_sorted_numerically(notes_dir):
    make_notes(notes_dir, {"9999999999.md": "", "10000000000.md": "", "1-a.md": ""})
    assert [p.name for p in legacy_notes(notes_dir)] == ["9999999999.md", "10000000000.md"]


def test_migration_skips_failed_renames(notes_dir, monkeypatch):
    make_notes(
        notes_dir,
        {"1700000000000.md": "# A\n", "1700000000001.md": "# B\n", "1700000000002.md": "# C\n"},
    )
    original_rename = Path.rename

    def flaky_rename(self, target):
        if self.name == "1700000000001.md":
            raise PermissionError("read-only")
        return original_rename(self, target)

    monkeypatch.setattr(Path, "rename", flaky_rename)

    migrate_legacy_notes(notes_dir)

    assert names(notes_dir) == ["1-a.md", "1700000000001.md", "2-c.md"]


def test_migration_never_overwrites(notes_dir, monkeypatch):
    make_notes(notes_dir, {"1-a.md": "# Kept\n", "1700000000000.md": "# A\n"})
    monkeypatch.setattr("notestack.file_storage.migration.next_number", lambda _dir: 1)

    with pytest.raises(FileExists):
        migrate_legacy_note(notes_dir, notes_dir / "1700000000000.md")

    migrate_legacy_notes(notes_dir)

    assert names(notes_dir) == ["1-a.md", "1700000000000.md"]
    assert (notes_dir / "1-a.md").read_text(encoding="utf-8") == "# Kept\n"


def test_migration_missing_dir(tmp_path):
    migrate_legacy_notes(tmp_path / "missing")


def test_move_loose_notes(tmp_path):
    root = tmp_path / "Notes"
    root.mkdir()
    make_notes(root, {"1700000000000.md": "# A", "other.txt": "x"})
    (root / "work").mkdir()

    moved = move_loose_notes(root, root / "Personal")

    assert moved == 1
    assert names(root / "Personal") == ["1700000000000.md"]
    assert names(root) == ["Personal", "other.txt", "work"]
