"""Tests for the run and demo CLI commands."""

import json
import locale

from typer.testing import CliRunner

from dirtree.cli.commands.run import build_tree
from dirtree.cli.main import app as cli_app
from dirtree.config import DirTreeConfig
from dirtree.utils import unicode_sort_key

runner = CliRunner()


def test_run_reads_file(tmp_path):
    commands = tmp_path / "commands.txt"
    commands.write_text("CREATE b\nCREATE a/x\n\nLIST\n", encoding="utf-8")

    result = runner.invoke(cli_app, ["run", str(commands)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["CREATE b", "CREATE a/x", "LIST", "a", "  x", "b"]


def test_run_reads_stdin():
    result = runner.invoke(cli_app, ["run"], input="CREATE fruits\r\nLIST\n")

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["CREATE fruits", "LIST", "fruits"]


def test_run_reports_command_errors_without_failing():
    result = runner.invoke(cli_app, ["run", "-"], input="DELETE a/b\nBOGUS\n")

    assert result.exit_code == 0
    assert "Cannot delete a/b - a does not exist" in result.output
    assert "Unknown command: BOGUS" in result.output


def test_run_missing_file(tmp_path):
    result = runner.invoke(cli_app, ["run", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "Error reading commands" in result.output


def test_run_json_output():
    result = runner.invoke(cli_app, ["run", "--json"], input="CREATE a/b\n")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output.split("\n", 1)[1])
    assert payload == {
        "name": "",
        "children": [{"name": "a", "children": [{"name": "b", "children": []}]}],
    }


def test_run_respects_config(monkeypatch):
    monkeypatch.setenv("DIRTREE_INDENT_WIDTH", "4")
    monkeypatch.setenv("DIRTREE_ECHO_COMMANDS", "false")

    result = runner.invoke(cli_app, ["run"], input="CREATE a/b\nLIST\n")

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["a", "    b"]


def test_demo_command():
    result = runner.invoke(cli_app, ["demo"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "CREATE fruits"
    assert "Cannot delete fruits/apples - fruits does not exist" in lines
    assert lines[-5:] == ["foods", "  fruits", "  grains", "  vegetables", "    squash"]


def test_demo_pretty():
    result = runner.invoke(cli_app, ["demo", "--pretty"])

    assert result.exit_code == 0, result.output
    assert "squash/" in result.output
    assert "foods/" in result.output


def test_run_keeps_whitespace_only_lines():
    result = runner.invoke(cli_app, ["run"], input="CREATE a\n \n\nLIST\n")

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["CREATE a", " ", "Unknown command: ", "LIST", "a"]


def test_run_locale_collation(monkeypatch):
    monkeypatch.setenv("DIRTREE_COLLATION", "locale")

    commands = "CREATE pears\nCREATE apples\nCREATE figs\nLIST\n"
    result = runner.invoke(cli_app, ["run"], input=commands)

    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[-3:] == ["apples", "figs", "pears"]


def test_build_tree_falls_back_when_locale_is_unavailable(monkeypatch):
    def unsupported(category, value=None):
        raise locale.Error("unsupported locale setting")

    monkeypatch.setattr(locale, "setlocale", unsupported)

    tree = build_tree(DirTreeConfig(collation="locale"))
    assert tree.sort_key is unicode_sort_key


def test_run_survives_unavailable_locale(monkeypatch):
    def unsupported(category, value=None):
        raise locale.Error("unsupported locale setting")

    monkeypatch.setattr(locale, "setlocale", unsupported)
    monkeypatch.setenv("DIRTREE_COLLATION", "locale")

    result = runner.invoke(cli_app, ["run"], input="CREATE b\nCREATE a\nLIST\n")

    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[-2:] == ["a", "b"]
