"""
Forward migrations of notes on disk.

Legacy notes (named by millisecond timestamp) are renamed into the numbered
`{number}-{slug}.md` scheme, oldest first, so the new ordering keys keep creation
order. Each file is a separate attempt: a failure is logged and the rest continue.
"""

import os
from pathlib import Path
from typing import List

from notestack.config.logger import get_logger
from notestack.errors import FileExists
from notestack.file_storage.note_filenames import format_filename, is_legacy_note, is_note_file
from notestack.file_storage.note_format import parse_title, title_slug
from notestack.file_storage.numbering import next_number
from notestack.util.format_utils import fmt_path

log = get_logger(__name__)


def legacy_notes(notes_dir: Path) -> List[Path]:
    """
    Legacy notes in a directory, oldest (smallest timestamp) first.
    """
    try:
        paths = [p for p in notes_dir.iterdir() if is_legacy_note(p)]
    except OSError as e:
        log.warning("Could not read notes directory, skipping migration: %s: %s", notes_dir, e)
        return []
    return sorted(paths, key=lambda p: int(p.stem))


def migrate_legacy_note(notes_dir: Path, path: Path) -> Path:
    """
    Rename one legacy note to the next free number and a slug of its title.
    The number is allocated now, so successive calls give increasing keys.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.warning("Could not read legacy note, migrating as untitled: %s: %s", path.name, e)
        content = ""
    slug = title_slug(parse_title(content))
    new_path = notes_dir / format_filename(next_number(notes_dir), slug)
    if new_path.exists():
        raise FileExists(f"Migration target already exists: {fmt_path(new_path)}")
    path.rename(new_path)
    log.info("Migrated legacy note: %s -> %s", path.name, new_path.name)
    return new_path


def migrate_legacy_notes(notes_dir: Path) -> None:
    """
    Rename all legacy notes in a directory into the numbered scheme. Best effort:
    notes that can't be read or renamed are left alone.
    """
    for path in legacy_notes(notes_dir):
        try:
            migrate_legacy_note(notes_dir, path)
        except OSError as e:
            log.warning("Could not migrate legacy note, leaving it as is: %s: %s", path.name, e)


def move_loose_notes(notes_root: Path, workspace_dir: Path) -> int:
    """
    Move Markdown files sitting directly in the notes root into a workspace directory.
    Used once, when workspaces are first set up over an older single-directory store.
    Errors propagate.
    """
    os.makedirs(workspace_dir, exist_ok=True)
    moved = 0
    for path in sorted(notes_root.iterdir()):
        if path.is_file() and is_note_file(path):
            path.rename(workspace_dir / path.name)
            moved += 1
    if moved:
        log.message("Moved %s notes into workspace: %s", moved, fmt_path(workspace_dir))
    return moved
