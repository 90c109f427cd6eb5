# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Flagwork argument engine.

Two families of errors exist:

- Registration errors are programmer mistakes detected while flags and
  subcommands are being declared (empty names, missing storage, duplicate
  names, missing handlers). They are raised immediately and are never caught
  by the engine itself.
- Parse errors are caused by end-user input (unknown flags, missing values,
  values that cannot be coerced or fail validation, missing required flags).
  They are recoverable and carry the offending flag so callers can report them.

Exception Hierarchy:
- FlagworkError
    ├── RegistrationError
    └── ParseError
        ├── UnknownFlagError
        ├── MissingValueError
        │   └── EmptyValueError
        ├── CoercionError
        ├── FlagValidationError
        └── MissingRequiredFlagError
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flagwork.parser.flag import Flag
    from flagwork.parser.flag_type import FlagType


class FlagworkError(Exception):
    """Base exception for the Flagwork framework."""


class RegistrationError(FlagworkError):
    """Exception raised when a flag or subcommand is registered incorrectly."""


class ParseError(FlagworkError):
    """Exception raised when the command line cannot be parsed."""

    def __init__(self, message: str, flag: Flag | None = None) -> None:
        super().__init__(message)
        self.flag = flag


class UnknownFlagError(ParseError):
    """Exception raised when a flag token does not resolve in the active scope."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown flag: {name}")
        self.name = name


class MissingValueError(ParseError):
    """Exception raised when a non-boolean flag is not followed by a value."""

    def __init__(self, flag: Flag, message: str | None = None) -> None:
        super().__init__(message or f"missing value for flag {flag.display_name}", flag)


class EmptyValueError(MissingValueError):
    """Exception raised when a non-boolean flag is followed by an empty value."""

    def __init__(self, flag: Flag) -> None:
        super().__init__(flag, f"empty value for flag {flag.display_name}")


class CoercionError(ParseError):
    """Exception raised when a raw string cannot be converted to a flag's type."""

    def __init__(
        self,
        flag_type: FlagType,
        raw: str,
        detail: str,
        flag: Flag | None = None,
    ) -> None:
        self.flag_type = flag_type
        self.raw = raw
        self.detail = detail
        message = f"invalid {flag_type.label} value {raw!r}: {detail}"
        if flag is not None:
            message = f"{message} (flag {flag.display_name})"
        super().__init__(message, flag)


class FlagValidationError(ParseError):
    """Exception raised when a validator rejects a coerced value."""

    def __init__(self, message: str, flag: Flag | None = None) -> None:
        self.message = message
        if flag is not None:
            message = f"invalid value for flag {flag.display_name}: {message}"
        super().__init__(message, flag)


class MissingRequiredFlagError(ParseError):
    """Exception raised when a required flag was never supplied."""

    def __init__(self, flag: Flag) -> None:
        super().__init__(f"missing required flag {flag.display_name}", flag)
