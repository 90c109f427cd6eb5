"""
Flagwork CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .coerce import HardwareAddress, coerce
from .flag import Cell, Flag, FlagView, new_flag
from .flag_type import FlagType
from .scope import FlagBuilderMixin, Scope
from .subcommand import Subcommand, SubcommandRegistry, SubcommandView
from .tokens import ParseState, Token, TokenStream

__all__ = [
    "Cell",
    "coerce",
    "Flag",
    "FlagBuilderMixin",
    "FlagType",
    "FlagView",
    "HardwareAddress",
    "new_flag",
    "ParseState",
    "Scope",
    "Subcommand",
    "SubcommandRegistry",
    "SubcommandView",
    "Token",
    "TokenStream",
]
