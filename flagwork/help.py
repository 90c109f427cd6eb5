# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich-based usage and help rendering for Flagwork CLIs.

`HelpRenderer` only consumes the read-only introspection snapshots (`FlagView`,
`SubcommandView`), so it never touches parser state.

Global help lists the usage line, the global flags and every subcommand with its
flags. Subcommand help lists the usage line, the description and the flags of
that subcommand. Each flag line shows the long and short name, the usage text,
the current (default) value and a `[required]` marker.
"""
from __future__ import annotations

from typing import Any
from urllib.parse import SplitResult

from rich.console import Console
from rich.markup import escape

from flagwork.console import console as default_console
from flagwork.parser.flag import FlagView
from flagwork.parser.flag_type import FlagType
from flagwork.parser.scope import HELP_FLAG_NAME
from flagwork.parser.subcommand import SubcommandView

QUOTED_TYPES = {
    FlagType.STRING,
    FlagType.RUNE,
    FlagType.HOST_PORT,
    FlagType.EMAIL,
    FlagType.FILE_PATH,
    FlagType.DIR_PATH,
}


def format_default(view: FlagView) -> str:
    """Format the current value of a flag for help output."""
    value: Any = view.value
    if value is None:
        return ""
    if view.flag_type in QUOTED_TYPES:
        return f'"{value}"'
    if isinstance(value, SplitResult):
        return value.geturl()
    if isinstance(value, list):
        return "[" + ", ".join(str(item) for item in value) + "]"
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


class HelpRenderer:
    """
    Prints usage and help text with a rich `Console`.

    Args:
        program (str): Program name used in the usage line.
        console (Console | None): Output console. Defaults to the shared console.
    """

    def __init__(self, program: str, console: Console | None = None) -> None:
        self.program = program
        self.console = console or default_console

    def get_usage(self, subcommand: SubcommandView | None = None) -> str:
        if subcommand is None:
            return f"{self.program} [global flags] [subcommand] [subcommand flags]"
        return f"{self.program} [global flags] {subcommand.name} [flags]"

    def format_flag(self, view: FlagView, width: int) -> str:
        names = f"--{view.name:<{width}}"
        if view.short_name:
            names += f" -{view.short_name}"
        line = f"[flag]{escape(names)}[/flag]: {escape(view.usage)}"
        default = format_default(view)
        if default:
            line += f" [default](default: {escape(default)})[/default]"
        if view.required:
            line += " [required]\\[required][/required]"
        return line

    def _render_flags(
        self, flags: list[FlagView], indent: str, skip_help: bool = False
    ) -> None:
        if skip_help:
            flags = [view for view in flags if view.name != HELP_FLAG_NAME]
        if not flags:
            return
        width = max(len(view.name) for view in flags)
        for view in flags:
            self.console.print(f"{indent}{self.format_flag(view, width)}")

    def render_global(
        self,
        flags: list[FlagView],
        subcommands: list[SubcommandView],
        description: str = "",
    ) -> None:
        """Print the global usage, global flags and all subcommands."""
        self.console.print(f"[bold]usage: {escape(self.get_usage())}[/bold]\n")
        if description:
            self.console.print(escape(description) + "\n")
        self.console.print("[bold]Global Flags:[/bold]")
        self._render_flags(flags, "  ")
        if not subcommands:
            return
        self.console.print("\n[bold]Subcommands:[/bold]")
        for subcommand in subcommands:
            self.console.print(
                f"  [subcommand]{escape(subcommand.name)}[/subcommand]: "
                f"{escape(subcommand.description)}"
            )
            self._render_flags(subcommand.flags, "      ", skip_help=True)

    def render_subcommand(self, subcommand: SubcommandView) -> None:
        """Print the usage, description and flags of one subcommand."""
        self.console.print(f"[bold]usage: {escape(self.get_usage(subcommand))}[/bold]\n")
        self.console.print(
            f"[subcommand]{escape(subcommand.name)}[/subcommand]: "
            f"{escape(subcommand.description)}\n"
        )
        self.console.print("[bold]Flags:[/bold]")
        self._render_flags(subcommand.flags, "  ")
