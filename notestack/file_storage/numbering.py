import os
from pathlib import Path

from notestack.config.logger import get_logger
from notestack.file_storage.note_filenames import parse_ordering_key

log = get_logger(__name__)


def max_ordering_key(notes_dir: Path) -> int:
    """
    Largest ordering key among the entries of a directory, or 0 if there are none.
    Entries without a key (legacy or foreign files) are ignored, as is an unreadable
    directory.
    """
    max_key = 0
    try:
        with os.scandir(notes_dir) as entries:
            for entry in entries:
                key = parse_ordering_key(Path(entry.name).stem)
                if key is not None and key > max_key:
                    max_key = key
    except OSError as e:
        log.debug("Could not scan for ordering keys, treating as empty: %s: %s", notes_dir, e)
        return 0
    return max_key


def next_number(notes_dir: Path) -> int:
    """
    Ordering key for a new note: one above the current maximum, or 1 if there is none.
    """
    return max_ordering_key(notes_dir) + 1
