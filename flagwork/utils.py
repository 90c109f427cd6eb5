# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import sys

import pythonjsonlogger.json
from rich.logging import RichHandler

LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def get_program_name(argv: list[str] | None = None) -> str:
    """Return the basename of the running program, as shown in usage lines."""
    argv = sys.argv if argv is None else argv
    if not argv or not argv[0]:
        return "flagwork"
    program = os.path.basename(argv[0])
    if program == "__main__.py":
        return "flagwork"
    return program


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            show_path=False,
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Configure root logging for a program built on Flagwork.

    The engine only logs on the `flagwork` logger: debug records for ignored
    barewords, matched subcommands and failed coercions, and a warning when a
    short name is shadowed by `-h`. At the default console level only warnings
    reach the terminal; pass `console_log_level=logging.DEBUG` to trace a parse.

    Args:
        mode (str | None): "cli" for Rich console output or "json" for one JSON
            object per record on stderr. Defaults to `FLAGWORK_LOG_MODE`, then "cli".
        log_filename (str | None): Also log to this file. `None` disables it.
        json_log_to_file (bool): Write the file as JSON instead of plain text.
        file_log_level (int): Level for the file handler.
        console_log_level (int): Level for the console handler.

    Raises:
        ValueError: If `mode` is not one of `LOG_MODES`.
    """
    mode = mode or os.getenv("FLAGWORK_LOG_MODE") or "cli"
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}. Must be one of: {', '.join(LOG_MODES)}")

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        if json_log_to_file:
            file_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
        else:
            file_handler.setFormatter(
                logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
        root.addHandler(file_handler)

    logging.getLogger("flagwork").debug("Logging initialized in '%s' mode.", mode)
