import io
import json

from notestack.commands import notes_commands
from notestack.config.settings import global_settings
from notestack.main import main


def test_note_lifecycle(settings):
    notes_dir = notes_commands.ensure_notes_dir()
    assert notes_dir == settings.notes_root / "Personal"

    first = notes_commands.create_note()
    second = notes_commands.create_note()
    assert (first.name, second.name) == ("1-untitled.md", "2-untitled.md")

    first = notes_commands.write_note(first, "# Alpha\n")
    second = notes_commands.write_note(second, "# Beta\n")
    assert [e.title for e in notes_commands.list_notes()] == ["Beta", "Alpha"]

    moved = notes_commands.reorder_note(first, 0)
    assert moved.name == "3-alpha.md"
    assert [e.title for e in notes_commands.list_notes()] == ["Alpha", "Beta"]
    assert notes_commands.read_note(moved) == "# Alpha\n"

    renamed = notes_commands.rename_note(second, "2-b")
    notes_commands.delete_note(renamed)
    assert [e.name for e in notes_commands.list_notes()] == ["3-alpha"]


def test_workspaces_are_separate(settings):
    notes_commands.create_note()
    notes_commands.create_workspace("Work")
    notes_commands.set_active_workspace("work")

    assert notes_commands.list_notes() == []
    assert notes_commands.create_note() == settings.notes_root / "work" / "1-untitled.md"

    notes_commands.rename_workspace("work", "Job")
    config = notes_commands.get_workspaces()
    assert [w.name for w in config.workspaces] == ["Personal", "Job"]

    notes_commands.delete_workspace("work")
    assert notes_commands.get_workspaces().active_workspace_id == "Personal"
    assert [e.name for e in notes_commands.list_notes()] == ["1-untitled"]


def test_cli(settings, tmp_path, capsys, monkeypatch):
    root_args = ["--root", str(settings.notes_root), "--config", str(settings.config_path)]

    assert main(root_args + ["new"]) == 0
    assert capsys.readouterr().out.strip().endswith("1-untitled.md")

    monkeypatch.setattr("sys.stdin", io.StringIO("# From CLI\n"))
    assert main(root_args + ["write", "1-untitled"]) == 0
    assert capsys.readouterr().out.strip().endswith("1-from-cli.md")

    assert main(root_args + ["ls", "--json"]) == 0
    out = capsys.readouterr().out
    listing = json.loads(out[out.index("[") :])
    assert [(e["name"], e["title"], e["ordering_key"]) for e in listing] == [
        ("1-from-cli", "From CLI", 1)
    ]

    assert main(root_args + ["ws", "new", "Work"]) == 0
    assert main(root_args + ["ws", "use", "work"]) == 0
    assert main(root_args + ["ws", "rm", "nope"]) == 1
    assert "Workspace not found" in capsys.readouterr().err


def test_cli_root_option_moves_store(tmp_path, capsys):
    other_root = tmp_path / "Elsewhere"
    other_config = tmp_path / "elsewhere.yml"

    assert main(["--root", str(other_root), "--config", str(other_config), "new"]) == 0
    capsys.readouterr()

    assert global_settings().notes_root == other_root
    assert global_settings().config_path == other_config
    assert (other_root / "Personal" / "1-untitled.md").exists()
    assert other_config.exists()
