"""Tests for the obsidian-workbench CLI."""

import json

import pytest
from typer.testing import CliRunner

from obsidian_workbench.cli import app
from obsidian_workbench.config import reset_config
from obsidian_workbench.utils.logging import configure_logging

runner = CliRunner()

NOTE = """# Consensus

Agreement between replicas.

## Raft

Leader election.

## Paxos

Single-decree agreement.
"""


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    # Handlers configured inside CliRunner point at its closed streams
    configure_logging()
    reset_config()


@pytest.fixture
def env(tmp_path):
    vault = tmp_path / "vault"
    vault.mkdir()
    note = vault / "systems.md"
    note.write_text(NOTE, encoding="utf-8")
    data_dir = tmp_path / "data"
    config_file = tmp_path / "workbench.yaml"
    config_file.write_text(
        f"vault_path: {vault}\ndata_dir: {data_dir}\n", encoding="utf-8"
    )
    return {"vault": vault, "note": note, "data": data_dir, "config": config_file}


def invoke(env, *args):
    return runner.invoke(app, [*args, "--config", str(env["config"])])


def snapshot(env):
    return json.loads((env["data"] / "workbenches.json").read_text(encoding="utf-8"))


class TestWorkbenchCommands:
    """Test workbench management commands."""

    def test_list_starts_with_default(self, env) -> None:
        result = invoke(env, "list")
        assert result.exit_code == 0, result.output
        assert "default" in result.output

    def test_create_switches_current(self, env) -> None:
        result = invoke(env, "create", "reading")

        assert result.exit_code == 0, result.output
        assert snapshot(env)["current_workbench"] == "reading"

    def test_create_blank_name_fails(self, env) -> None:
        result = invoke(env, "create", "   ")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_rename(self, env) -> None:
        invoke(env, "create", "reading")
        result = invoke(env, "rename", "reading", "later")

        assert result.exit_code == 0, result.output
        assert set(snapshot(env)["workbenches"]) == {"default", "later"}
        assert snapshot(env)["current_workbench"] == "later"

    def test_delete_default_is_refused(self, env) -> None:
        result = invoke(env, "delete", "default")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_delete_current_falls_back_to_default(self, env) -> None:
        invoke(env, "create", "reading")
        result = invoke(env, "delete", "reading")

        assert result.exit_code == 0, result.output
        assert snapshot(env)["current_workbench"] == "default"

    def test_switch_unknown(self, env) -> None:
        result = invoke(env, "switch", "missing")
        assert result.exit_code == 1


class TestCardCommands:
    """Test card commands against a real vault."""

    def test_add_stamps_identifier_and_shows(self, env) -> None:
        result = invoke(env, "add", str(env["note"]), "7")

        assert result.exit_code == 0, result.output
        assert "Added" in result.output
        assert "## Raft ^wb-" in env["note"].read_text(encoding="utf-8")

        shown = invoke(env, "show")
        assert "Raft" in shown.output
        assert "Leader election." in shown.output

    def test_add_twice_reports_present(self, env) -> None:
        invoke(env, "add", str(env["note"]), "5")
        result = invoke(env, "add", str(env["note"]), "5")

        assert result.exit_code == 0, result.output
        assert "Already present" in result.output
        assert len(snapshot(env)["workbenches"]["default"]) == 1

    def test_add_outside_heading_fails(self, env) -> None:
        env["note"].write_text("preamble\n\n# Title\n", encoding="utf-8")
        result = invoke(env, "add", str(env["note"]), "1")
        assert result.exit_code == 1

    def test_sync_all_picks_up_edits(self, env) -> None:
        invoke(env, "add", str(env["note"]), "5")
        invoke(env, "add", str(env["note"]), "9")
        text = env["note"].read_text(encoding="utf-8")
        env["note"].write_text(text.replace("Leader election.", "Terms."), encoding="utf-8")

        result = invoke(env, "sync-all")

        assert result.exit_code == 0, result.output
        assert "Synced 2/2" in result.output
        cards = snapshot(env)["workbenches"]["default"]
        assert [c["title"] for c in cards] == ["Paxos", "Raft"]
        assert cards[1]["content"] == "Terms."

    def test_reorder_and_remove(self, env) -> None:
        invoke(env, "add", str(env["note"]), "5")
        invoke(env, "add", str(env["note"]), "9")

        result = invoke(env, "reorder", "2", "1")
        assert result.exit_code == 0, result.output
        titles = [c["title"] for c in snapshot(env)["workbenches"]["default"]]
        assert titles == ["Raft", "Paxos"]

        result = invoke(env, "remove", "1")
        assert result.exit_code == 0, result.output
        titles = [c["title"] for c in snapshot(env)["workbenches"]["default"]]
        assert titles == ["Paxos"]

    def test_reorder_without_arguments(self, env) -> None:
        result = invoke(env, "reorder")
        assert result.exit_code == 2

    def test_reorder_from_edited_outline(self, env, tmp_path) -> None:
        invoke(env, "add", str(env["note"]), "5")
        invoke(env, "add", str(env["note"]), "9")
        outline = tmp_path / "outline.md"
        invoke(env, "show", "--output", str(outline))
        blocks = outline.read_text(encoding="utf-8").strip().split("\n\n")
        outline.write_text("\n\n".join(reversed(blocks)), encoding="utf-8")

        result = invoke(env, "reorder", "--from-file", str(outline))

        assert result.exit_code == 0, result.output
        titles = [c["title"] for c in snapshot(env)["workbenches"]["default"]]
        assert titles == ["Raft", "Paxos"]

    def test_jump(self, env) -> None:
        invoke(env, "add", str(env["note"]), "9")
        identifier = snapshot(env)["workbenches"]["default"][0]["id"]

        result = invoke(env, "jump", identifier)

        assert result.exit_code == 0, result.output
        assert f"{env['note'].name}:9" in result.output

    def test_jump_unknown(self, env) -> None:
        result = invoke(env, "jump", "wb-missing")
        assert result.exit_code == 1


class TestMarkupInUserText:
    """Titles and names containing Rich markup are printed literally."""

    def test_bracketed_heading_title(self, env) -> None:
        env["note"].write_text("# Notes [/draft]\n\nBody.\n", encoding="utf-8")

        added = invoke(env, "add", str(env["note"]), "1")
        shown = invoke(env, "show")
        removed = invoke(env, "remove", "1")

        assert added.exit_code == 0, added.output
        assert "Notes [/draft]" in added.output
        assert shown.exit_code == 0, shown.output
        assert "Notes [/draft]" in shown.output
        assert removed.exit_code == 0, removed.output

    def test_bracketed_workbench_name(self, env) -> None:
        created = invoke(env, "create", "[/x]")
        missing = invoke(env, "switch", "[/y]")

        assert created.exit_code == 0, created.output
        assert "[/x]" in created.output
        assert missing.exit_code == 1
        assert isinstance(missing.exception, SystemExit)
        assert "[/y]" in missing.output
