# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Parser configuration for Flagwork CLIs."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

COMPLETION_SUBCOMMAND = "completion"


class ParserConfig(BaseModel):
    """
    Behaviour switches for a `Flagwork` CLI.

    Attributes:
        program (str | None): Program name shown in usage and completion scripts.
            Defaults to the basename of `sys.argv[0]`.
        description (str): One-line description shown at the top of the help.
        exempt_scopes (set[str]): Subcommands that skip the global required-flag
            check (the built-in `completion` subcommand by default).
        empty_bool_is_true (bool): Whether an empty boolean value (`--verbose=`)
            means `True`.
        exit_on_help (bool): Exit with status 0 after printing help. When False a
            `HelpSignal` is raised instead.
        add_completion (bool): Register the built-in `completion` subcommand.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    program: str | None = None
    description: str = ""
    exempt_scopes: set[str] = Field(default_factory=lambda: {COMPLETION_SUBCOMMAND})
    empty_bool_is_true: bool = True
    exit_on_help: bool = True
    add_completion: bool = True

    @field_validator("program")
    @classmethod
    def validate_program(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("program name can't be blank")
        return value

    @field_validator("exempt_scopes")
    @classmethod
    def validate_exempt_scopes(cls, value: set[str]) -> set[str]:
        if any(not name.strip() for name in value):
            raise ValueError("exempt scope names can't be empty")
        return value
