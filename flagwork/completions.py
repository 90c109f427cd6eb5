# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Shell completion script generation for Flagwork CLIs.

Scripts are generated from the read-only introspection API of a CLI
(`list_flags()` and `list_subcommands()`), so they always reflect the flags and
subcommands registered at the time of generation.

Functions:
- generate_bash_completion: Bash script using `complete -F`.
- generate_zsh_completion: Zsh script using `compdef` and `_describe`.
- generate_completion: Dispatch on the shell name.
- write_completion: Print a script or write it to a file; backs the built-in
  `completion` subcommand.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from flagwork.console import console as default_console
from flagwork.logger import logger
from flagwork.parser.flag import FlagView
from flagwork.utils import get_program_name

if TYPE_CHECKING:
    from flagwork.flagwork import Flagwork

SUPPORTED_SHELLS = ("bash", "zsh")

CHECK_STRING_IN_ARRAY = """\
_flagwork_in_array() {
  local needle="$1"
  shift
  local element
  for element in "$@"; do
    if [[ "$element" == "$needle" ]]; then
      return 0
    fi
  done
  return 1
}
"""


def _quote(value: str) -> str:
    """Double-quote `value` for bash and zsh source."""
    escaped = re.sub(r'(["\\$`])', r"\\\1", value)
    return f'"{escaped}"'


def _identifier(value: str) -> str:
    return re.sub(r"\W", "_", value)


def _flag_words(flags: list[FlagView]) -> list[str]:
    words = []
    for view in flags:
        words.append(f"--{view.name}")
        if view.short_name:
            words.append(f"-{view.short_name}")
    return words


def _described(name: str, description: str) -> str:
    name = name.replace(":", "\\:")
    return _quote(f"{name}:{description}")


def _program(cli: Flagwork, program: str | None) -> str:
    return program or cli.program or get_program_name()


def generate_bash_completion(cli: Flagwork, program: str | None = None) -> str:
    """Return a bash completion script for `cli`."""
    program = _program(cli, program)
    function = f"_flagwork_complete_{_identifier(program)}"
    subcommands = cli.list_subcommands()

    global_words = " ".join(_quote(word) for word in _flag_words(cli.list_flags()))
    subcommand_words = " ".join(_quote(subcommand.name) for subcommand in subcommands)

    lines = [
        CHECK_STRING_IN_ARRAY,
        f"# Bash completion script for {program}",
        f"{function}() {{",
        "  COMPREPLY=()",
        '  local current_word="${COMP_WORDS[COMP_CWORD]}"',
        f"  local opts=({global_words})",
        f"  local valid_subcommands=({subcommand_words})",
    ]
    for subcommand in subcommands:
        words = " ".join(_quote(word) for word in _flag_words(subcommand.flags))
        lines.append(f"  local flags_{_identifier(subcommand.name)}=({words})")
    lines += [
        '  local current_subcmd=""',
        "  local word",
        '  for word in "${COMP_WORDS[@]:1:COMP_CWORD-1}"; do',
        '    if _flagwork_in_array "$word" "${valid_subcommands[@]}"; then',
        '      current_subcmd="$word"',
        "      break",
        "    fi",
        "  done",
        "",
        '  case "$current_subcmd" in',
    ]
    for subcommand in subcommands:
        lines += [
            f"    {_quote(subcommand.name)})",
            f'      COMPREPLY=( $(compgen -W "${{flags_{_identifier(subcommand.name)}[*]}}"'
            ' -- "$current_word") )',
            "      ;;",
        ]
    lines += [
        "    *)",
        '      COMPREPLY=( $(compgen -W "${opts[*]} ${valid_subcommands[*]}"'
        ' -- "$current_word") )',
        "      ;;",
        "  esac",
        "}",
        f"complete -F {function} {program}",
        "",
    ]
    return "\n".join(lines)


def generate_zsh_completion(cli: Flagwork, program: str | None = None) -> str:
    """Return a zsh completion script for `cli`."""
    program = _program(cli, program)
    function = f"_flagwork_complete_{_identifier(program)}"
    subcommands = cli.list_subcommands()

    global_opts = " ".join(
        _described(f"--{view.name}", view.usage) for view in cli.list_flags()
    )
    subcommand_opts = " ".join(
        _described(subcommand.name, subcommand.description) for subcommand in subcommands
    )
    subcommand_names = " ".join(_quote(subcommand.name) for subcommand in subcommands)

    lines = [
        f"#compdef {program}",
        "",
        CHECK_STRING_IN_ARRAY,
        f"# Zsh completion script for {program}",
        f"{function}() {{",
        f"  local -a opts=({global_opts})",
        f"  local -a valid_subcommands=({subcommand_opts})",
        f"  local -a subcommand_names=({subcommand_names})",
    ]
    for subcommand in subcommands:
        opts = " ".join(
            _described(f"--{view.name}", view.usage) for view in subcommand.flags
        )
        lines.append(f"  local -a flags_{_identifier(subcommand.name)}=({opts})")
    lines += [
        '  local current_subcmd=""',
        "  local word",
        '  for word in "${words[@]:1:CURRENT-2}"; do',
        '    if _flagwork_in_array "$word" "${subcommand_names[@]}"; then',
        '      current_subcmd="$word"',
        "      break",
        "    fi",
        "  done",
        "",
        '  case "$current_subcmd" in',
    ]
    for subcommand in subcommands:
        lines += [
            f"    {_quote(subcommand.name)})",
            f"      _describe 'flags' flags_{_identifier(subcommand.name)}",
            "      ;;",
        ]
    lines += [
        "    *)",
        "      _describe 'subcommands' valid_subcommands",
        "      _describe 'global flags' opts",
        "      ;;",
        "  esac",
        "}",
        f"compdef {function} {program}",
        "",
    ]
    return "\n".join(lines)


def generate_completion(cli: Flagwork, shell: str, program: str | None = None) -> str:
    """
    Return the completion script for `shell`.

    Raises:
        ValueError: If `shell` is not one of `SUPPORTED_SHELLS`.
    """
    shell = shell.strip().lower()
    if shell == "bash":
        return generate_bash_completion(cli, program)
    if shell == "zsh":
        return generate_zsh_completion(cli, program)
    raise ValueError(
        f"Unsupported shell: '{shell}'. Must be one of: {', '.join(SUPPORTED_SHELLS)}"
    )


def write_completion(
    cli: Flagwork,
    shell: str,
    out: str = "",
    console: Console | None = None,
) -> str:
    """
    Generate the completion script for `shell`, then write it to `out` or print it.

    Returns:
        str: The generated script.
    """
    script = generate_completion(cli, shell)
    if out:
        path = Path(out).expanduser()
        path.write_text(script, encoding="UTF-8")
        logger.info("Wrote %s completion script to %s", shell, path)
    else:
        console = console or default_console
        console.print(
            script, markup=False, emoji=False, highlight=False, soft_wrap=True, end=""
        )
    return script
