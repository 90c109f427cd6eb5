# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for constructing and running Flagwork CLIs.

This module defines `Flagwork`, the registry that owns the global flag scope,
the subcommands and the parser configuration, and implements the two-pass parse
of process arguments.

Parsing works in two passes over a private copy of `argv[1:]`:

1. Global pass: flag tokens resolve against the global scope. The first bareword
   that names a registered subcommand ends the pass; other barewords are
   ignored. Required global flags are then enforced, unless the matched
   subcommand is exempt (the built-in `completion` subcommand by default).
2. Subcommand pass: the remaining tokens resolve against the subcommand's own
   scope, after which its required flags are enforced.

For every flag token the value is taken from the attached `=value` part or the
next token, coerced to the flag's type, validated and stored into the flag's
`Cell`. A boolean flag followed by nothing, or by another flag, is set to True.
The first error ends the parse. Flags applied before the failing token keep
their values.

Example:
    cli = Flagwork(description="Demo CLI")
    verbose = Cell(False)
    name = Cell("World")
    cli.add_bool("verbose", "v", verbose, "Enable verbose output")
    cli.subcommand("greet", "Greet a person", greet).add_string(
        "name", "n", name, "Name of the person to greet", required=True
    )
    subcommand = cli.parse(["app", "-v", "true", "greet", "--name", "Abiira"])

A `Flagwork` instance is not thread-safe: finish registration before parsing and
do not parse concurrently with the same instance.
"""
from __future__ import annotations

import sys
from typing import Any, Callable, Sequence

from rich.console import Console
from rich.markup import escape

from flagwork.completions import SUPPORTED_SHELLS, write_completion
from flagwork.config import COMPLETION_SUBCOMMAND, ParserConfig
from flagwork.console import console as default_console
from flagwork.exceptions import (
    EmptyValueError,
    FlagworkError,
    MissingRequiredFlagError,
    MissingValueError,
    UnknownFlagError,
)
from flagwork.help import HelpRenderer
from flagwork.logger import logger
from flagwork.parser.flag import Cell, Flag, FlagView
from flagwork.parser.flag_type import FlagType
from flagwork.parser.scope import FlagBuilderMixin, Scope, is_help_flag
from flagwork.parser.subcommand import Subcommand, SubcommandRegistry, SubcommandView
from flagwork.parser.tokens import ParseState, TokenKind, TokenStream, classify
from flagwork.signals import HelpSignal
from flagwork.utils import get_program_name
from flagwork.validators import FlagValidator, choices


class Flagwork(FlagBuilderMixin):
    """
    Registry of global flags and subcommands, and the parser over them.

    Args:
        program (str | None): Program name shown in usage and completion scripts.
        description (str): Description shown at the top of the global help.
        config (ParserConfig | None): Parser configuration. Keyword `overrides`
            are applied on top of it.
        console (Console | None): Console used for help and error output.

    Attributes:
        state (ParseState): Phase reached by the last parse. `DONE` after a
            successful parse, `HELP` after help output, and the scanning phase
            that failed when a `ParseError` was raised.
    """

    def __init__(
        self,
        program: str | None = None,
        description: str = "",
        config: ParserConfig | None = None,
        console: Console | None = None,
        **overrides: Any,
    ) -> None:
        updates = dict(overrides)
        if program is not None:
            updates["program"] = program
        if description:
            updates["description"] = description
        if config is None:
            config = ParserConfig(**updates)
        elif updates:
            config = ParserConfig(**{**config.model_dump(), **updates})
        self.config: ParserConfig = config
        self.program: str = config.program or get_program_name()
        self.console: Console = console or default_console
        self.flags: Scope = Scope()
        self.subcommands: SubcommandRegistry = SubcommandRegistry()
        self.help_renderer = HelpRenderer(self.program, self.console)
        self.state: ParseState = ParseState.DONE
        if config.add_completion:
            self._add_completion()

    def _add_completion(self) -> None:
        """Register the built-in `completion` subcommand."""
        shell = Cell("")
        out = Cell("")
        self.subcommand(
            COMPLETION_SUBCOMMAND,
            "Generate shell completion scripts",
            self._completion_handler,
        ).add_string(
            "shell",
            "s",
            shell,
            f"The shell to generate completions for [{'|'.join(SUPPORTED_SHELLS)}]",
            required=True,
            validators=[choices(SUPPORTED_SHELLS)],
        ).add_string(
            "out", "o", out, "Write the script to this file instead of stdout"
        )

    def _completion_handler(self, _global_flags: Scope, flags: Scope) -> str:
        return write_completion(
            self, flags.get_string("shell"), flags.get_string("out"), self.console
        )

    def add_flag(
        self,
        flag_type: FlagType | str,
        name: str,
        short_name: str,
        storage: Cell,
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> Flagwork:
        """Register a global flag and return the CLI for chaining."""
        self.flags.add_flag(flag_type, name, short_name, storage, usage, required, validators)
        return self

    def add_flag_ptr(self, flag: Flag) -> Flagwork:
        """Register a flag created with `new_flag()` in the global scope."""
        self.flags.add_flag_ptr(flag)
        return self

    def subcommand(
        self,
        name: str,
        description: str,
        handler: Callable[..., Any] | None = None,
    ) -> Subcommand:
        """
        Register a subcommand and return it so its flags can be chained.

        Raises:
            RegistrationError: On an empty name or description, a non-callable
                handler, or a duplicate name.
        """
        return self.subcommands.register(name, description, handler)

    def find_subcommand(self, name: str) -> Subcommand | None:
        return self.subcommands.find(name)

    def list_flags(self) -> list[FlagView]:
        return self.flags.list_all()

    def list_subcommands(self) -> list[SubcommandView]:
        return self.subcommands.list_all()

    def print_usage(self, subcommand: Subcommand | str | None = None) -> None:
        """Render the global help, or the help of one subcommand."""
        if isinstance(subcommand, str):
            subcommand = self.find_subcommand(subcommand)
        if subcommand is None:
            self.help_renderer.render_global(
                self.list_flags(), self.list_subcommands(), self.config.description
            )
        else:
            self.help_renderer.render_subcommand(subcommand.view())

    def _show_help(self, subcommand: Subcommand | None) -> None:
        self.state = ParseState.HELP
        logger.debug(
            "Help requested for %s.",
            f"subcommand '{subcommand.name}'" if subcommand else "global scope",
        )
        self.print_usage(subcommand)
        if self.config.exit_on_help:
            sys.exit(0)
        raise HelpSignal(scope=subcommand.name if subcommand else "")

    def _apply(self, flag: Flag, stream: TokenStream) -> None:
        """Take the value for `flag` from the stream and store it."""
        empty_bool = self.config.empty_bool_is_true
        value = stream.peek_value()
        if value is not None and value.attached:
            stream.consume()
            if not value.text and not flag.is_bool:
                raise EmptyValueError(flag)
            flag.apply(value.text, empty_bool=empty_bool)
            return
        if value is None or not value.text or value.text.startswith("-"):
            if flag.is_bool:
                flag.mark_true()
                return
            if value is not None and not value.text:
                raise EmptyValueError(flag)
            raise MissingValueError(flag)
        stream.consume()
        flag.apply(value.text, empty_bool=empty_bool)

    def _scan(
        self,
        stream: TokenStream,
        scope: Scope,
        subcommand: Subcommand | None = None,
    ) -> Subcommand | None:
        """
        Apply flag tokens against `scope` until the stream is exhausted or, in the
        global pass, a subcommand name is found.

        Returns:
            Subcommand | None: The matched subcommand (global pass only).
        """
        for token in stream:
            if token.attached:
                logger.debug("Ignoring value %r without a flag.", token.text)
                continue
            kind, name = classify(token.text)
            if kind is TokenKind.BAREWORD:
                if subcommand is None:
                    match = self.subcommands.find(name)
                    if match is not None:
                        logger.debug("Matched subcommand '%s'.", name)
                        return match
                logger.debug("Ignoring bareword %r in the %s scope.", name, scope.label)
                continue
            if is_help_flag(name):
                self._show_help(subcommand)
            flag = scope.lookup(name)
            if flag is None:
                raise UnknownFlagError(token.text)
            self._apply(flag, stream)
        return None

    def _enforce_required(self, scope: Scope) -> None:
        flag = scope.first_missing_required()
        if flag is not None:
            raise MissingRequiredFlagError(flag)

    def parse(self, argv: Sequence[str] | None = None) -> Subcommand | None:
        """
        Parse `argv` (defaults to `sys.argv`), storing flag values into their cells.

        `argv[0]` is the program name and is skipped. The caller's list is never
        modified.

        Returns:
            Subcommand | None: The matched subcommand, or None.

        Raises:
            ParseError: On an unknown flag, a missing or invalid value, or a
                missing required flag.
            HelpSignal: If help was requested and `exit_on_help` is False.
        """
        argv = sys.argv if argv is None else argv
        self.flags.reset_seen()
        for registered in self.subcommands:
            registered.flags.reset_seen()

        stream = TokenStream(list(argv)[1:])
        self.state = ParseState.SCANNING_GLOBAL
        subcommand = self._scan(stream, self.flags)
        if subcommand is not None:
            self.state = ParseState.FOUND_SUBCOMMAND

        if subcommand is None or subcommand.name not in self.config.exempt_scopes:
            self._enforce_required(self.flags)

        if subcommand is None:
            self.state = ParseState.DONE
            return None

        self.state = ParseState.SCANNING_SUBCOMMAND
        self._scan(stream, subcommand.flags, subcommand)
        self._enforce_required(subcommand.flags)
        self.state = ParseState.DONE
        return subcommand

    def run(self, argv: Sequence[str] | None = None) -> None:
        """
        Parse `argv`, invoke the matched subcommand's handler and exit.

        Exits with status 0 after help or a successful handler, and with status 1
        after printing a Flagwork error.
        """
        try:
            subcommand = self.parse(argv)
            if subcommand is None:
                logger.debug("No subcommand given.")
            else:
                subcommand.invoke(self.flags)
        except HelpSignal:
            sys.exit(0)
        except FlagworkError as error:
            logger.debug("Run failed: %s", error)
            self.console.print(f"[error]error:[/error] {escape(str(error))}")
            sys.exit(1)
        sys.exit(0)

    def __str__(self) -> str:
        return (
            f"Flagwork(program={self.program!r}, flags={len(self.flags)}, "
            f"subcommands={len(self.subcommands)})"
        )
