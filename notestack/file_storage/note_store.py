import functools
import os
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from cachetools import cached
from strif import atomic_output_file

from notestack.config.logger import get_logger
from notestack.config.settings import global_settings
from notestack.errors import FileExists, InvalidFilename, InvalidState, NoteNotFound
from notestack.file_storage.migration import migrate_legacy_notes
from notestack.file_storage.note_filenames import (
    format_filename,
    format_stem,
    is_note_file,
    NOTE_SUFFIX,
    parse_ordering_key,
    slug_of_stem,
)
from notestack.file_storage.note_format import parse_title, read_title, title_slug
from notestack.file_storage.numbering import next_number
from notestack.ordering.order_engine import display_order, OrderedEntry, plan_reorder, Rename
from notestack.util.format_utils import fmt_lines, fmt_path
from notestack.util.slugs import UNTITLED_SLUG

log = get_logger(__name__)


T = TypeVar("T")

NEW_NOTE_CONTENT = "\n"


def synchronized(method: Callable[..., T]) -> Callable[..., T]:
    """
    Simple way to synchronize a few methods.
    """

    @functools.wraps(method)
    def synchronized_method(self, *args: Any, **kwargs: Any) -> T:
        with self._lock:
            return method(self, *args, **kwargs)

    return synchronized_method


@dataclass(frozen=True)
class NoteEntry:
    name: str
    """Filename stem."""

    path: Path

    modified: int
    """Modification time, in whole seconds since the epoch."""

    title: str

    ordering_key: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["path"] = str(self.path)
        return d


def note_sort_key(entry: NoteEntry) -> Tuple[int, int, str]:
    """
    Display order: notes with an ordering key first, highest key first; then the rest,
    most recently modified first. Name breaks any remaining tie.
    """
    if entry.ordering_key is not None:
        return (0, -entry.ordering_key, entry.name)
    return (1, -entry.modified, entry.name)


def _same_path(a: Path, b: Path) -> bool:
    return Path(a).resolve() == Path(b).resolve()


class NoteStore:
    """
    The notes of one workspace directory. Ordering keys live only in filenames and are
    re-read from the directory by every operation.
    """

    def __init__(self, notes_dir: Path, title_read_bytes: Optional[int] = None):
        self.notes_dir = Path(notes_dir)
        self.title_read_bytes = title_read_bytes or global_settings().title_read_bytes
        self._lock = threading.RLock()

    def __str__(self):
        return f"NoteStore({fmt_path(self.notes_dir)})"

    def ensure_dir(self) -> Path:
        if not self.notes_dir.exists():
            os.makedirs(self.notes_dir, exist_ok=True)
            log.info("Created notes directory: %s", fmt_path(self.notes_dir))
        return self.notes_dir

    def note_path(self, path: str | Path) -> Path:
        """
        Relative paths and bare filenames are taken to be within this directory.
        """
        path = Path(path)
        return path if path.is_absolute() else self.notes_dir / path

    @synchronized
    def migrate(self) -> None:
        if self.notes_dir.is_dir():
            migrate_legacy_notes(self.notes_dir)

    def list_notes(self) -> List[NoteEntry]:
        """
        All notes in the directory, in display order.
        """
        if not self.notes_dir.exists():
            return []

        entries: List[NoteEntry] = []
        with os.scandir(self.notes_dir) as it:
            for dir_entry in it:
                path = Path(dir_entry.path)
                if not is_note_file(path):
                    continue
                try:
                    if not dir_entry.is_file():
                        continue
                    modified = int(dir_entry.stat().st_mtime)
                except OSError as e:
                    log.debug("Skipping unreadable entry: %s: %s", path.name, e)
                    continue
                entries.append(
                    NoteEntry(
                        name=path.stem,
                        path=path,
                        modified=modified,
                        title=read_title(path, self.title_read_bytes),
                        ordering_key=parse_ordering_key(path.stem),
                    )
                )

        return sorted(entries, key=note_sort_key)

    def numbered_notes(self) -> List[OrderedEntry]:
        """
        Notes that have an ordering key, highest first. Raises `OSError` if the directory
        can't be read.
        """
        entries = []
        for path in self.notes_dir.iterdir():
            if not is_note_file(path):
                continue
            key = parse_ordering_key(path.stem)
            if key is not None:
                entries.append(OrderedEntry(key, slug_of_stem(path.stem), path))
        return display_order(entries)

    def read(self, path: str | Path) -> str:
        path = self.note_path(path)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise NoteNotFound(f"Note not found: {fmt_path(path)}")

    @synchronized
    def write(self, path: str | Path, content: str) -> Path:
        """
        Save content, then rename the note if its title now gives a different slug.
        Returns the note's path after the save. The rename is skipped if another note
        already has the new name, or if the note has no ordering key.
        """
        path = self.note_path(path)
        with atomic_output_file(str(path)) as tmp_path:
            Path(tmp_path).write_text(content, encoding="utf-8")
        log.debug("Saved note: %s", fmt_path(path))

        key = parse_ordering_key(path.stem)
        if key is None:
            return path

        new_stem = format_stem(key, title_slug(parse_title(content)))
        if new_stem == path.stem:
            return path

        new_path = path.with_name(f"{new_stem}{NOTE_SUFFIX}")
        if new_path.exists() and not new_path.samefile(path):
            log.info("Not renaming note, name already taken: %s -> %s", path.name, new_path.name)
            return path

        try:
            path.rename(new_path)
        except OSError as e:
            log.warning(
                "Could not rename note after save: %s -> %s: %s", path.name, new_path.name, e
            )
            return path

        log.info("Renamed note to match title: %s -> %s", path.name, new_path.name)
        return new_path

    @synchronized
    def create(self) -> Path:
        """
        Create an empty untitled note at the top of the list.
        """
        self.ensure_dir()
        path = self.notes_dir / format_filename(next_number(self.notes_dir), UNTITLED_SLUG)
        if path.exists():
            raise FileExists(f"Note already exists: {fmt_path(path)}")
        with atomic_output_file(str(path)) as tmp_path:
            Path(tmp_path).write_text(NEW_NOTE_CONTENT, encoding="utf-8")
        log.info("Created note: %s", path.name)
        return path

    @synchronized
    def delete(self, path: str | Path) -> None:
        path = self.note_path(path)
        try:
            path.unlink()
        except FileNotFoundError:
            raise NoteNotFound(f"Note not found: {fmt_path(path)}")
        log.info("Deleted note: %s", path.name)

    @synchronized
    def rename(self, path: str | Path, new_name: str) -> Path:
        """
        Rename a note to `{new_name}.md` in the same directory.
        """
        path = self.note_path(path)
        new_name = new_name.strip()
        if not new_name or "/" in new_name or new_name in (".", ".."):
            raise InvalidFilename(f"Invalid note name: {new_name!r}")

        new_path = path.with_name(f"{new_name}{NOTE_SUFFIX}")
        if new_path.exists():
            raise FileExists(f"A note with this name already exists: {new_path.name}")
        if not path.exists():
            raise NoteNotFound(f"Note not found: {fmt_path(path)}")

        path.rename(new_path)
        log.info("Renamed note: %s -> %s", path.name, new_path.name)
        return new_path

    @synchronized
    def reorder(self, path: str | Path, new_index: int) -> Path:
        """
        Move a note to display position `new_index` among the numbered notes and return
        its new path. Other renamed notes must be re-listed to get their paths.
        """
        path = self.note_path(path)
        entries = self.numbered_notes()

        source_idx = next((i for i, e in enumerate(entries) if _same_path(e.path, path)), None)
        if source_idx is None:
            raise NoteNotFound(f"Note not found: {fmt_path(path)}")

        plan = plan_reorder(entries, source_idx, new_index)
        if plan.is_noop:
            return path

        log.info(
            "Reordering note %s to index %s (%s path, %s renames)",
            path.name,
            new_index,
            "dense" if plan.dense else "gap",
            len(plan.renames),
        )
        self._apply_renames(plan.renames)

        return self.notes_dir / format_filename(plan.new_key, plan.moved.slug)

    def _apply_renames(self, renames: List[Rename]) -> None:
        """
        Apply renames in order. If one fails, put back the ones already done (in reverse)
        and re-raise, so a failed reorder leaves the directory as it was whenever the
        filesystem allows.
        """
        moves: List[Tuple[Path, Path]] = []
        for rename in renames:
            if rename.entry.path is None:
                raise InvalidState(f"Can't rename a note with no path: {rename.entry.slug}")
            moves.append((rename.entry.path, self.notes_dir / rename.new_filename))

        done: List[Tuple[Path, Path]] = []
        try:
            for old_path, new_path in moves:
                if new_path.exists():
                    raise FileExists(f"Reorder target already exists: {new_path.name}")
                old_path.rename(new_path)
                done.append((old_path, new_path))
        except OSError:
            log.error(
                "Reorder failed after %s of %s renames, rolling back", len(done), len(renames)
            )
            for old_path, new_path in reversed(done):
                try:
                    new_path.rename(old_path)
                except OSError as e:
                    log.error(
                        "Could not roll back rename: %s -> %s: %s", new_path.name, old_path.name, e
                    )
            raise

        log.debug("Renamed notes:\n%s", fmt_lines(f"{old.name} -> {new.name}" for old, new in done))


@cached({})
def _note_store_for(notes_dir: Path) -> NoteStore:
    return NoteStore(notes_dir)


def get_note_store(notes_dir: str | Path) -> NoteStore:
    """
    The shared store for a directory. The path is resolved first, so every spelling of
    one directory gets the same store and the same lock.
    """
    return _note_store_for(Path(notes_dir).resolve())
