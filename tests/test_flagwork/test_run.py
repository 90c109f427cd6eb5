from io import StringIO

import pytest
from rich.console import Console

from flagwork import Cell, Flagwork, ParserConfig
from flagwork.console import flagwork_theme
from flagwork.exceptions import FlagworkError


def make_cli(**overrides) -> Flagwork:
    console = Console(file=StringIO(), theme=flagwork_theme, width=200)
    return Flagwork(program="app", console=console, **overrides)


def output(cli: Flagwork) -> str:
    return cli.console.file.getvalue()


def test_run_invokes_handler_and_exits_zero():
    cli = make_cli()
    calls = []
    cli.subcommand(
        "greet", "Greet a person", lambda g, flags: calls.append(flags.get_string("name"))
    ).add_string("name", "n", Cell("World"))
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app", "greet", "--name", "Abiira"])
    assert excinfo.value.code == 0
    assert calls == ["Abiira"]


def test_run_without_subcommand_exits_zero():
    cli = make_cli()
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app"])
    assert excinfo.value.code == 0


def test_run_reports_parse_errors():
    cli = make_cli()
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app", "--nope"])
    assert excinfo.value.code == 1
    assert "error: unknown flag: --nope" in output(cli)


def test_run_reports_handler_errors():
    cli = make_cli()

    def fail():
        raise FlagworkError("handler failed")

    cli.subcommand("fail", "Always fails", fail)
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app", "fail"])
    assert excinfo.value.code == 1
    assert "handler failed" in output(cli)


def test_run_help_exits_zero():
    cli = make_cli(exit_on_help=False)
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app", "--help"])
    assert excinfo.value.code == 0
    assert "usage: app" in output(cli)


def test_run_completion_prints_script():
    cli = make_cli()
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app", "completion", "--shell", "bash"])
    assert excinfo.value.code == 0
    assert "complete -F _flagwork_complete_app app" in output(cli)


def test_run_completion_writes_file(tmp_path):
    cli = make_cli()
    target = tmp_path / "_app"
    with pytest.raises(SystemExit):
        cli.run(["app", "completion", "-s", "zsh", "-o", str(target)])
    assert target.read_text().startswith("#compdef app")
    assert output(cli) == ""


def test_run_completion_rejects_unknown_shell():
    cli = make_cli()
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app", "completion", "--shell", "fish"])
    assert excinfo.value.code == 1
    assert "fish is not a valid choice" in output(cli)


def test_run_completion_requires_shell():
    cli = make_cli()
    with pytest.raises(SystemExit) as excinfo:
        cli.run(["app", "completion"])
    assert excinfo.value.code == 1
    assert "missing required flag [-s | --shell]" in output(cli)


def test_completion_can_be_disabled():
    cli = make_cli(add_completion=False)
    assert cli.find_subcommand("completion") is None
    assert cli.list_subcommands() == []


def test_config_object_and_overrides():
    config = ParserConfig(program="tool", exit_on_help=False)
    cli = Flagwork(config=config, add_completion=False)
    assert cli.program == "tool"
    assert cli.config.exit_on_help is False
    assert cli.config.add_completion is False
    assert config.add_completion is True


def test_program_name_defaults_to_argv(monkeypatch):
    monkeypatch.setattr("sys.argv", ["/usr/local/bin/mytool", "--x"])
    assert Flagwork().program == "mytool"
