from io import StringIO

import pytest
from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document
from rich.console import Console

from flagwork import Cell, Flagwork
from flagwork.completer import FlagworkCompleter


@pytest.fixture
def completer():
    cli = Flagwork(program="app", console=Console(file=StringIO()))
    cli.add_bool("verbose", "v", Cell(False), "Verbose")
    cli.add_int("port", "p", Cell(8080), "Port")
    cli.subcommand("greet", "Greet a person").add_string(
        "name", "n", Cell("World"), "Name"
    ).add_bool("upper", "u", Cell(False), "Upper case")
    return FlagworkCompleter(cli)


def texts(completer, text):
    return [completion.text for completion in completer.get_completions(Document(text), None)]


def test_empty_input_suggests_subcommands_and_global_flags(completer):
    results = list(completer.get_completions(Document(""), None))
    assert all(isinstance(result, Completion) for result in results)
    suggestions = [result.text for result in results]
    assert "greet" in suggestions
    assert "completion" in suggestions
    assert "--verbose" in suggestions
    assert "--port" in suggestions
    assert "--name" not in suggestions


def test_subcommand_prefix(completer):
    results = list(completer.get_completions(Document("gr"), None))
    assert len(results) == 1
    assert results[0].text == "greet"
    assert results[0].start_position == -2


def test_flag_prefix(completer):
    assert texts(completer, "--v") == ["--verbose"]


def test_subcommand_flags(completer):
    suggestions = texts(completer, "greet ")
    assert suggestions == ["--help", "--name", "--upper"]


def test_no_suggestions_for_flag_value(completer):
    assert texts(completer, "greet --name ") == []
    assert texts(completer, "--port ") == []


def test_used_flags_are_not_suggested(completer):
    assert texts(completer, "greet --name x ") == ["--help", "--upper"]
    assert texts(completer, "greet --name=x --") == ["--help", "--upper"]


def test_bool_flag_suggests_values_and_flags(completer):
    suggestions = texts(completer, "--verbose ")
    assert suggestions[:2] == ["true", "false"]
    assert "--port" in suggestions
    assert "--verbose" not in suggestions
    assert "greet" not in suggestions


def test_bool_flag_value_then_subcommand(completer):
    assert "greet" in texts(completer, "--verbose true ")
    assert "greet" in texts(completer, "--verbose=true ")
    assert texts(completer, "-v true greet ") == ["--help", "--name", "--upper"]


def test_unbalanced_quotes(completer):
    assert texts(completer, 'greet --name "abc') == []
