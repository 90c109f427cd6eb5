# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token handling for the Flagwork parse loop.

`TokenStream` walks a private copy of the process arguments. When the scanner
reaches a token containing `=`, the token is split once at the first `=` and the
right-hand part is spliced into the copy directly after it, marked as
`attached`. The caller's list is never modified.

`classify()` turns a token into a `(kind, name)` pair: `--name` is a long flag,
`-n` a short flag and anything else a bareword.

`ParseState` names the phases of `Flagwork.parse()`:

    SCANNING_GLOBAL -> FOUND_SUBCOMMAND -> SCANNING_SUBCOMMAND -> DONE
                    \\-> DONE (no subcommand)
    HELP is entered from either scanning state when `--help` / `-h` is seen.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence


class ParseState(Enum):
    """Phases of a single parse."""

    SCANNING_GLOBAL = "scanning_global"
    FOUND_SUBCOMMAND = "found_subcommand"
    SCANNING_SUBCOMMAND = "scanning_subcommand"
    HELP = "help"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


class TokenKind(Enum):
    LONG_FLAG = "long_flag"
    SHORT_FLAG = "short_flag"
    BAREWORD = "bareword"

    def __str__(self) -> str:
        return self.value


@dataclass
class Token:
    """
    One argument in the working copy.

    Attributes:
        text (str): The argument text.
        attached (bool): True for the value half of a `--name=value` split.
    """

    text: str
    attached: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


def classify(text: str) -> tuple[TokenKind, str]:
    """Return the token kind and the flag name (or the bareword itself)."""
    if text.startswith("--"):
        return TokenKind.LONG_FLAG, text[2:]
    if text.startswith("-"):
        return TokenKind.SHORT_FLAG, text[1:]
    return TokenKind.BAREWORD, text


class TokenStream:
    """Sequential reader over a copy of the argument list."""

    def __init__(self, args: Sequence[str]) -> None:
        self._tokens: list[Token] = [Token(str(arg)) for arg in args]
        self.position: int = 0

    def _split_current(self) -> None:
        token = self._tokens[self.position]
        if token.attached or "=" not in token.text:
            return
        name, _, value = token.text.partition("=")
        self._tokens[self.position : self.position + 1] = [
            Token(name),
            Token(value, attached=True),
        ]

    def __iter__(self) -> Iterator[Token]:
        """
        Yield the remaining tokens, splitting `name=value` lazily.

        Blank arguments are skipped. The attached half of a split is always yielded,
        even when empty, so `--verbose=` keeps its empty value.
        """
        while self.position < len(self._tokens):
            token = self._tokens[self.position]
            if token.is_blank and not token.attached:
                self.position += 1
                continue
            self._split_current()
            token = self._tokens[self.position]
            self.position += 1
            yield token

    def peek_value(self) -> Token | None:
        """Return the token after the current one without consuming it."""
        if self.position < len(self._tokens):
            return self._tokens[self.position]
        return None

    def consume(self) -> Token:
        """Consume the token returned by `peek_value()` so the scanner skips it."""
        token = self._tokens[self.position]
        self.position += 1
        return token

    def remaining(self) -> list[str]:
        return [token.text for token in self._tokens[self.position :]]

    def __len__(self) -> int:
        return len(self._tokens)
