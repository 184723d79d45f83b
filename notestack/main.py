"""
Command-line interface for notestack.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from rich import print as rprint
from rich.markup import escape

from notestack.commands import notes_commands
from notestack.config.logger import get_logger
from notestack.config.settings import APP_NAME, update_global_settings
from notestack.config.setup import setup
from notestack.config.text_styles import (
    COLOR_EMPH,
    COLOR_ERROR,
    COLOR_HINT,
    COLOR_KEY,
    EMOJI_ACTIVE,
)
from notestack.errors import is_fatal
from notestack.file_storage.note_filenames import NOTE_SUFFIX
from notestack.version import get_version
from notestack.workspaces.workspace_registry import get_workspace_registry, reset_workspace_registry

log = get_logger(__name__)


def resolve_note_arg(note: str) -> Path:
    """
    A note given on the command line: an existing path, or a filename (with or without
    `.md`) in the active workspace.
    """
    path = Path(note)
    if path.exists():
        return path
    name = note if note.endswith(NOTE_SUFFIX) else f"{note}{NOTE_SUFFIX}"
    return get_workspace_registry().active_dir() / name


def cmd_ls(args) -> None:
    notes_commands.ensure_notes_dir()
    entries = notes_commands.list_notes()
    if args.json:
        print(json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False))
        return
    if not entries:
        rprint(f"[{COLOR_HINT}](no notes)[/{COLOR_HINT}]")
    for i, entry in enumerate(entries):
        rprint(
            f"{i:>3}  [{COLOR_EMPH}]{escape(entry.title)}[/{COLOR_EMPH}]  "
            f"[{COLOR_HINT}]{escape(entry.path.name)}[/{COLOR_HINT}]"
        )


def cmd_new(args) -> None:
    print(notes_commands.create_note())


def cmd_show(args) -> None:
    sys.stdout.write(notes_commands.read_note(resolve_note_arg(args.note)))


def cmd_write(args) -> None:
    content = sys.stdin.read()
    print(notes_commands.write_note(resolve_note_arg(args.note), content))


def cmd_rm(args) -> None:
    notes_commands.delete_note(resolve_note_arg(args.note))


def cmd_mv(args) -> None:
    print(notes_commands.rename_note(resolve_note_arg(args.note), args.new_name))


def cmd_reorder(args) -> None:
    print(notes_commands.reorder_note(resolve_note_arg(args.note), args.index))


def cmd_ws_ls(args) -> None:
    config = notes_commands.get_workspaces()
    if args.json:
        print(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))
        return
    for workspace in config.workspaces:
        active = EMOJI_ACTIVE if workspace.id == config.active_workspace_id else " "
        shortcut = workspace.shortcut or " "
        rprint(
            f"{active} [{COLOR_KEY}]{shortcut}[/{COLOR_KEY}]  "
            f"[{COLOR_EMPH}]{escape(workspace.name)}[/{COLOR_EMPH}]  "
            f"[{COLOR_HINT}]{escape(workspace.id)}[/{COLOR_HINT}]"
        )


def cmd_ws_new(args) -> None:
    workspace = notes_commands.create_workspace(args.name)
    print(workspace.id)


def cmd_ws_rm(args) -> None:
    notes_commands.delete_workspace(args.workspace_id)


def cmd_ws_rename(args) -> None:
    notes_commands.rename_workspace(args.workspace_id, args.new_name)


def cmd_ws_use(args) -> None:
    notes_commands.set_active_workspace(args.workspace_id)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description=__doc__)
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {get_version()}")
    parser.add_argument("--root", type=Path, help="notes root directory (one folder per workspace)")
    parser.add_argument("--config", type=Path, help="workspace config file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    ls = subparsers.add_parser("ls", help="list notes in the active workspace")
    ls.add_argument("--json", action="store_true")
    ls.set_defaults(func=cmd_ls)

    subparsers.add_parser("new", help="create an untitled note").set_defaults(func=cmd_new)

    show = subparsers.add_parser("show", help="print a note")
    show.add_argument("note")
    show.set_defaults(func=cmd_show)

    write = subparsers.add_parser("write", help="replace a note's content from stdin")
    write.add_argument("note")
    write.set_defaults(func=cmd_write)

    rm = subparsers.add_parser("rm", help="delete a note")
    rm.add_argument("note")
    rm.set_defaults(func=cmd_rm)

    mv = subparsers.add_parser("mv", help="rename a note's file")
    mv.add_argument("note")
    mv.add_argument("new_name", help="new filename, without .md")
    mv.set_defaults(func=cmd_mv)

    reorder = subparsers.add_parser("reorder", help="move a note to a position in the list")
    reorder.add_argument("note")
    reorder.add_argument("index", type=int, help="0 is the top")
    reorder.set_defaults(func=cmd_reorder)

    ws = subparsers.add_parser("ws", help="manage workspaces")
    ws_sub = ws.add_subparsers(dest="ws_command", required=True)

    ws_ls = ws_sub.add_parser("ls", help="list workspaces")
    ws_ls.add_argument("--json", action="store_true")
    ws_ls.set_defaults(func=cmd_ws_ls)

    ws_new = ws_sub.add_parser("new", help="create a workspace")
    ws_new.add_argument("name")
    ws_new.set_defaults(func=cmd_ws_new)

    ws_rm = ws_sub.add_parser("rm", help="remove a workspace (its notes stay on disk)")
    ws_rm.add_argument("workspace_id")
    ws_rm.set_defaults(func=cmd_ws_rm)

    ws_rename = ws_sub.add_parser("rename", help="change a workspace's display name")
    ws_rename.add_argument("workspace_id")
    ws_rename.add_argument("new_name")
    ws_rename.set_defaults(func=cmd_ws_rename)

    ws_use = ws_sub.add_parser("use", help="switch the active workspace")
    ws_use.add_argument("workspace_id")
    ws_use.set_defaults(func=cmd_ws_use)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.root or args.config:
        with update_global_settings() as settings:
            if args.root:
                settings.notes_root = Path(args.root)
            if args.config:
                settings.config_path = Path(args.config)
        reset_workspace_registry()

    setup()

    try:
        args.func(args)
    except Exception as e:
        if is_fatal(e):
            log.exception("Unexpected error running %s", args.command)
            raise
        rprint(f"[{COLOR_ERROR}]{escape(str(e))}[/{COLOR_ERROR}]", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
