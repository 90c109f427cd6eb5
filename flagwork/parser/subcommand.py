# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Subcommand` and `SubcommandRegistry`.

A subcommand is a named verb (`greet`, `version`, ...) with a description, an
optional handler and its own flag scope. At most one subcommand is selected per
parse: the first bareword of the global pass that matches a registered name.

Handlers are plain callables. A handler taking no parameters is called as
`handler()`; otherwise it receives `(global_flags, subcommand_flags)`, both
`Scope` objects, so it can read parsed values through the typed accessors.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from flagwork.exceptions import RegistrationError
from flagwork.logger import logger
from flagwork.parser.flag import Cell, Flag, FlagView
from flagwork.parser.flag_type import FlagType
from flagwork.parser.scope import FlagBuilderMixin, Scope
from flagwork.validators import FlagValidator


@dataclass(frozen=True)
class SubcommandView:
    """Read-only snapshot of a subcommand, used by help and completion."""

    name: str
    description: str
    flags: list[FlagView]


class Subcommand(FlagBuilderMixin):
    """
    A named subcommand with its own flags.

    Args:
        name (str): The token selecting this subcommand.
        description (str): One line shown in help and completions.
        handler (Callable | None): Invoked by `Flagwork.run()` after parsing.
    """

    def __init__(
        self,
        name: str,
        description: str,
        handler: Callable[..., Any] | None = None,
    ) -> None:
        self.name = name
        self.description = description
        self.handler = handler
        self.flags = Scope(name)

    def add_flag(
        self,
        flag_type: FlagType | str,
        name: str,
        short_name: str,
        storage: Cell,
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> Subcommand:
        self.flags.add_flag(
            flag_type, name, short_name, storage, usage, required, validators
        )
        return self

    def add_flag_ptr(self, flag: Flag) -> Subcommand:
        """Attach a flag created with `new_flag()`, possibly shared with other scopes."""
        self.flags.add_flag_ptr(flag)
        return self

    def list_flags(self) -> list[FlagView]:
        return self.flags.list_all()

    def view(self) -> SubcommandView:
        return SubcommandView(self.name, self.description, self.flags.list_all())

    def invoke(self, global_flags: Scope) -> Any:
        """Call the handler, passing the flag scopes when it accepts them."""
        if self.handler is None:
            logger.debug("Subcommand '%s' has no handler.", self.name)
            return None
        try:
            params = inspect.signature(self.handler).parameters
        except (TypeError, ValueError):
            params = None
        if params is not None and not params:
            return self.handler()
        return self.handler(global_flags, self.flags)

    def __str__(self) -> str:
        return f"Subcommand(name={self.name!r}, flags={len(self.flags)})"

    def __repr__(self) -> str:
        return str(self)


class SubcommandRegistry:
    """Ordered registry of subcommands, keyed by name."""

    def __init__(self) -> None:
        self._subcommands: dict[str, Subcommand] = {}

    def register(
        self,
        name: str,
        description: str,
        handler: Callable[..., Any] | None = None,
    ) -> Subcommand:
        """
        Register a new subcommand.

        Raises:
            RegistrationError: On an empty name or description, a non-callable
                handler, or a name already in use.
        """
        if not isinstance(name, str) or not name:
            raise RegistrationError("subcommand name can't be empty")
        if name.startswith("-") or any(char.isspace() for char in name):
            raise RegistrationError(
                f"subcommand name '{name}' must not start with '-' or contain whitespace"
            )
        if not isinstance(description, str) or not description:
            raise RegistrationError(f"description for subcommand '{name}' can't be empty")
        if handler is not None and not callable(handler):
            raise RegistrationError(
                f"handler for subcommand '{name}' must be callable, "
                f"got {type(handler).__name__}"
            )
        if name in self._subcommands:
            raise RegistrationError(f"subcommand '{name}' is already registered")
        subcommand = Subcommand(name, description, handler)
        self._subcommands[name] = subcommand
        logger.debug("Registered subcommand '%s'.", name)
        return subcommand

    def find(self, token: str) -> Subcommand | None:
        return self._subcommands.get(token)

    def list_all(self) -> list[SubcommandView]:
        return [subcommand.view() for subcommand in self._subcommands.values()]

    def names(self) -> list[str]:
        return list(self._subcommands)

    def __contains__(self, name: object) -> bool:
        return name in self._subcommands

    def __iter__(self) -> Iterator[Subcommand]:
        return iter(self._subcommands.values())

    def __len__(self) -> int:
        return len(self._subcommands)
