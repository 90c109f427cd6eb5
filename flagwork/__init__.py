"""
Flagwork CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .config import ParserConfig
from .flagwork import Flagwork
from .parser import Cell, Flag, FlagType, Scope, Subcommand, new_flag

__all__ = [
    "Cell",
    "Flag",
    "FlagType",
    "Flagwork",
    "new_flag",
    "ParserConfig",
    "Scope",
    "Subcommand",
]
