import pytest
from pydantic import ValidationError

from flagwork.config import ParserConfig


def test_defaults():
    config = ParserConfig()
    assert config.program is None
    assert config.exempt_scopes == {"completion"}
    assert config.empty_bool_is_true is True
    assert config.exit_on_help is True
    assert config.add_completion is True


def test_defaults_are_not_shared():
    first, second = ParserConfig(), ParserConfig()
    first.exempt_scopes.add("version")
    assert second.exempt_scopes == {"completion"}


def test_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        ParserConfig(exit_on_hlep=False)


def test_rejects_blank_values():
    with pytest.raises(ValidationError):
        ParserConfig(program="  ")
    with pytest.raises(ValidationError):
        ParserConfig(exempt_scopes={"completion", ""})


def test_validates_assignment():
    config = ParserConfig()
    with pytest.raises(ValidationError):
        config.exit_on_help = "maybe"
