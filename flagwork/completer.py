# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `FlagworkCompleter`, a Prompt Toolkit completer for interactive shells
built on a `Flagwork` CLI.

The input is read as the arguments of the program (without the program name):
- Before a subcommand, subcommand names and global flags are suggested.
- After a subcommand, the flags of that subcommand are suggested.
- Flags already given in the active scope are not suggested again.
- Nothing is suggested where a flag value is expected, except `true`/`false`
  and further flags after a boolean flag.
"""

from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from flagwork.parser.flag import Flag
from flagwork.parser.scope import Scope
from flagwork.parser.tokens import TokenKind, classify

if TYPE_CHECKING:
    from flagwork import Flagwork


class FlagworkCompleter(Completer):
    """
    Prompt Toolkit completer for Flagwork argument input.

    Args:
        cli (Flagwork): The CLI providing flags and subcommands.
    """

    def __init__(self, cli: "Flagwork"):
        self.cli = cli

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
            cursor_at_end_of_token = text.endswith((" ", "\t")) or not text
        except ValueError:
            return

        parsed = tokens if cursor_at_end_of_token else tokens[:-1]
        stub = "" if cursor_at_end_of_token else tokens[-1]

        scope, in_subcommand, pending, used = self._walk(parsed)
        if pending is not None and not pending.is_bool:
            return

        suggestions = [f"--{view.name}" for view in scope.list_all() if view.name not in used]
        if pending is not None:
            suggestions = ["true", "false"] + suggestions
        elif not in_subcommand and not stub.startswith("-"):
            suggestions = [
                subcommand.name for subcommand in self.cli.list_subcommands()
            ] + suggestions
        yield from self._yield_lcp_completions(suggestions, stub)

    def _walk(self, tokens: list[str]) -> tuple[Scope, bool, Flag | None, set[str]]:
        """
        Follow the completed tokens the way the parser would.

        Returns:
            tuple: The active scope, whether a subcommand was entered, the flag
                whose value comes next (if any), and the flag names already used.
        """
        scope = self.cli.flags
        in_subcommand = False
        pending: Flag | None = None
        used: set[str] = set()
        for token in tokens:
            if pending is not None and not token.startswith("-"):
                pending = None
                continue
            pending = None
            name, has_value = token, False
            if "=" in token:
                name, has_value = token.partition("=")[0], True
            kind, flag_name = classify(name)
            if kind is TokenKind.BAREWORD:
                subcommand = None if in_subcommand else self.cli.find_subcommand(flag_name)
                if subcommand is not None:
                    scope = subcommand.flags
                    in_subcommand = True
                    used = set()
                continue
            flag = scope.lookup(flag_name)
            if flag is None:
                continue
            used.add(flag.name)
            if not has_value:
                pending = flag
        return scope, in_subcommand, pending, used

    def _ensure_quote(self, text: str) -> str:
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(self, suggestions, stub):
        """
        Yield completions for the current stub using longest-common-prefix logic.

        - If only one match, yield it fully.
        - If multiple matches share a longer prefix, insert the prefix and also
          list all matches.
        - Otherwise list all matches individually.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
        elif len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
        else:
            for match in matches:
                yield Completion(
                    self._ensure_quote(match), start_position=-len(stub), display=match
                )
