# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements `Scope`, the registry of flags belonging to one namespace: the global
scope of a `Flagwork` CLI or the scope owned by a single subcommand.

A scope keeps its flags in registration order and resolves flag tokens by long
name first, then short name. Every scope starts with the implicit boolean
`help`/`h` flag at index 0.

Key Features:
- Registration with immediate contract checks (`RegistrationError`)
- Typed builder helpers through `FlagBuilderMixin` (`add_string`, `add_int`, ...)
- Lookup by long or short name
- Read-only `FlagView` snapshots for help and completion renderers
- Typed accessors (`get_string`, `get_int`, ...) for subcommand handlers

Scopes are not thread-safe. Register every flag before the first parse and do
not parse concurrently with the same CLI object.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterator, TypeVar

from flagwork.exceptions import RegistrationError
from flagwork.logger import logger
from flagwork.parser.flag import Cell, Flag, FlagView
from flagwork.parser.flag_type import FlagType
from flagwork.validators import FlagValidator

if TYPE_CHECKING:
    from datetime import datetime, timedelta
    from ipaddress import IPv4Address, IPv6Address
    from urllib.parse import SplitResult
    from uuid import UUID

    from flagwork.parser.coerce import HardwareAddress

HELP_FLAG_NAME = "help"
HELP_FLAG_SHORT_NAME = "h"

B = TypeVar("B", bound="FlagBuilderMixin")


def is_help_flag(name: str) -> bool:
    return name in (HELP_FLAG_NAME, HELP_FLAG_SHORT_NAME)


class FlagBuilderMixin(ABC):
    """
    Typed registration helpers shared by `Scope`, `Subcommand` and `Flagwork`.

    Each helper registers one flag through `add_flag()` and returns the receiver,
    so registrations chain:

        cli.subcommand("greet", "Greet a person", greet) \\
            .add_string("name", "n", name, "Name to greet", required=True) \\
            .add_string("greeting", "g", greeting, "Greeting to use")
    """

    @abstractmethod
    def add_flag(
        self: B,
        flag_type: FlagType | str,
        name: str,
        short_name: str,
        storage: Cell,
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        """Register a flag of `flag_type` and return the receiver."""

    def add_string(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[str],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.STRING, name, short_name, storage, usage, required, validators)

    def add_int(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[int],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.INT, name, short_name, storage, usage, required, validators)

    def add_int64(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[int],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.INT64, name, short_name, storage, usage, required, validators)

    def add_float32(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[float],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.FLOAT32, name, short_name, storage, usage, required, validators)

    def add_float64(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[float],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.FLOAT64, name, short_name, storage, usage, required, validators)

    def add_bool(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[bool],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.BOOL, name, short_name, storage, usage, required, validators)

    def add_rune(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[str],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.RUNE, name, short_name, storage, usage, required, validators)

    def add_duration(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[timedelta],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.DURATION, name, short_name, storage, usage, required, validators)

    def add_string_list(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[list[str]],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.STRING_LIST, name, short_name, storage, usage, required, validators)

    def add_int_list(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[list[int]],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.INT_LIST, name, short_name, storage, usage, required, validators)

    def add_timestamp(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[datetime],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.TIMESTAMP, name, short_name, storage, usage, required, validators)

    def add_ip(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[IPv4Address | IPv6Address | None],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.IP_ADDRESS, name, short_name, storage, usage, required, validators)

    def add_mac(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[HardwareAddress | None],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.MAC_ADDRESS, name, short_name, storage, usage, required, validators)

    def add_url(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[SplitResult | None],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.URL, name, short_name, storage, usage, required, validators)

    def add_uuid(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[UUID | None],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.UUID, name, short_name, storage, usage, required, validators)

    def add_host_port(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[str],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.HOST_PORT, name, short_name, storage, usage, required, validators)

    def add_email(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[str],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.EMAIL, name, short_name, storage, usage, required, validators)

    def add_file_path(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[str],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.FILE_PATH, name, short_name, storage, usage, required, validators)

    def add_dir_path(
        self: B,
        name: str,
        short_name: str,
        storage: Cell[str],
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> B:
        return self.add_flag(FlagType.DIR_PATH, name, short_name, storage, usage, required, validators)


class Scope(FlagBuilderMixin):
    """
    An ordered namespace of flags.

    Args:
        name (str): Owning subcommand name, or "" for the global scope.
    """

    def __init__(self, name: str = "") -> None:
        self.name: str = name
        self._flags: list[Flag] = []
        self._flag_map: dict[str, Flag] = {}
        self._add_help()

    def _add_help(self) -> None:
        """Add the help flag to the scope."""
        self.register(
            Flag(
                flag_type=FlagType.BOOL,
                name=HELP_FLAG_NAME,
                short_name=HELP_FLAG_SHORT_NAME,
                storage=Cell(False),
                usage="Print help message and exit",
            )
        )

    @property
    def label(self) -> str:
        return f"subcommand '{self.name}'" if self.name else "global"

    def _validate_flag(self, flag: Flag) -> None:
        if not isinstance(flag, Flag):
            raise RegistrationError(f"Expected a Flag, got {type(flag).__name__}")
        if not isinstance(flag.flag_type, FlagType):
            try:
                flag.flag_type = FlagType(flag.flag_type)
            except ValueError as error:
                raise RegistrationError(str(error)) from error
        if not isinstance(flag.name, str) or not flag.name:
            raise RegistrationError("flag name can't be empty")
        if flag.name.startswith("-") or "=" in flag.name:
            raise RegistrationError(
                f"flag name '{flag.name}' must not start with '-' or contain '='"
            )
        if not isinstance(flag.short_name, str):
            raise RegistrationError(f"short name for --{flag.name} must be a string")
        if flag.storage is None:
            raise RegistrationError(f"flag value for --{flag.name} can't be None")
        if not isinstance(flag.storage, Cell):
            raise RegistrationError(
                f"flag value for --{flag.name} must be a Cell, "
                f"got {type(flag.storage).__name__}"
            )
        if flag.name in self._flag_map:
            raise RegistrationError(
                f"Flag '--{flag.name}' is already registered in the {self.label} scope"
            )

    def register(self, flag: Flag) -> Flag:
        """
        Register `flag` in this scope.

        Raises:
            RegistrationError: On an empty or duplicate name, or missing storage.
        """
        self._validate_flag(flag)
        if flag.short_name and is_help_flag(flag.short_name) and self._flags:
            logger.warning(
                "Short name '-%s' of --%s is shadowed by the help flag.",
                flag.short_name,
                flag.name,
            )
        self._flags.append(flag)
        self._flag_map[flag.name] = flag
        logger.debug("Registered flag %s in the %s scope.", flag.display_name, self.label)
        return flag

    def add_flag(
        self,
        flag_type: FlagType | str,
        name: str,
        short_name: str,
        storage: Cell,
        usage: str = "",
        required: bool = False,
        validators: list[FlagValidator] | None = None,
    ) -> Scope:
        """Register a new flag and return the scope for chaining."""
        if not isinstance(flag_type, FlagType):
            try:
                flag_type = FlagType(flag_type)
            except ValueError as error:
                raise RegistrationError(str(error)) from error
        self.register(
            Flag(
                flag_type=flag_type,
                name=name,
                short_name=short_name,
                storage=storage,
                usage=usage,
                required=required,
                validators=list(validators or []),
            )
        )
        return self

    def add_flag_ptr(self, flag: Flag) -> Scope:
        """Register an existing (possibly shared) flag and return the scope."""
        self.register(flag)
        return self

    def lookup(self, token: str) -> Flag | None:
        """Resolve a flag by long name first, then by short name."""
        flag = self._flag_map.get(token)
        if flag is not None:
            return flag
        if not token:
            return None
        return next((flag for flag in self._flags if flag.short_name == token), None)

    def list_all(self) -> list[FlagView]:
        """Return snapshots of all flags in registration order."""
        return [flag.view() for flag in self._flags]

    def reset_seen(self) -> None:
        for flag in self._flags:
            flag.seen = False

    def first_missing_required(self) -> Flag | None:
        """Return the first required flag not supplied by the current parse."""
        return next((flag for flag in self._flags if flag.required and not flag.seen), None)

    def get(self, name: str) -> Any:
        """
        Return the stored value of the flag named `name` (long or short).

        Raises:
            KeyError: If no such flag exists in this scope.
        """
        flag = self.lookup(name)
        if flag is None:
            raise KeyError(f"No flag named '{name}' in the {self.label} scope")
        return flag.value

    def _get_typed(self, name: str, *flag_types: FlagType) -> Any:
        flag = self.lookup(name)
        if flag is None:
            raise KeyError(f"No flag named '{name}' in the {self.label} scope")
        if flag.flag_type not in flag_types:
            expected = " or ".join(flag_type.label for flag_type in flag_types)
            raise TypeError(
                f"Flag --{flag.name} is a {flag.flag_type.label} flag, not {expected}"
            )
        return flag.value

    def get_string(self, name: str) -> str:
        return self._get_typed(
            name,
            FlagType.STRING,
            FlagType.RUNE,
            FlagType.HOST_PORT,
            FlagType.EMAIL,
            FlagType.FILE_PATH,
            FlagType.DIR_PATH,
        )

    def get_int(self, name: str) -> int:
        return self._get_typed(name, FlagType.INT, FlagType.INT64)

    def get_float(self, name: str) -> float:
        return self._get_typed(name, FlagType.FLOAT32, FlagType.FLOAT64)

    def get_bool(self, name: str) -> bool:
        return self._get_typed(name, FlagType.BOOL)

    def get_duration(self, name: str) -> timedelta:
        return self._get_typed(name, FlagType.DURATION)

    def get_string_list(self, name: str) -> list[str]:
        return self._get_typed(name, FlagType.STRING_LIST)

    def get_int_list(self, name: str) -> list[int]:
        return self._get_typed(name, FlagType.INT_LIST)

    def get_timestamp(self, name: str) -> datetime:
        return self._get_typed(name, FlagType.TIMESTAMP)

    def get_ip(self, name: str) -> IPv4Address | IPv6Address | None:
        return self._get_typed(name, FlagType.IP_ADDRESS)

    def get_mac(self, name: str) -> HardwareAddress | None:
        return self._get_typed(name, FlagType.MAC_ADDRESS)

    def get_url(self, name: str) -> SplitResult | None:
        return self._get_typed(name, FlagType.URL)

    def get_uuid(self, name: str) -> UUID | None:
        return self._get_typed(name, FlagType.UUID)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[Flag]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)

    def __str__(self) -> str:
        required = sum(flag.required for flag in self._flags)
        return f"Scope(name={self.name!r}, flags={len(self._flags)}, required={required})"

    def __repr__(self) -> str:
        return str(self)
