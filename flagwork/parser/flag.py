# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Flag`, the registered description of one command-line flag, and `Cell`,
the caller-owned storage a flag writes its parsed value into.

A flag has a long name (`--name`), an optional short name (`-n`), a `FlagType`
selecting its coercion, a storage cell, usage text, a required marker and an
ordered list of validators. The engine never allocates storage: the caller
creates a `Cell` holding the default value and keeps a reference to read the
parsed value back after `Flagwork.parse()`.

Example:
    name = Cell("World")
    cli.add_string("name", "n", name, "Name of the person to greet")
    cli.parse(["app", "--name", "Abiira"])
    name.value  # "Abiira"

`FlagView` is the frozen, read-only snapshot of a flag handed to help and
completion renderers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from flagwork.exceptions import CoercionError
from flagwork.logger import logger
from flagwork.parser.coerce import coerce
from flagwork.parser.flag_type import FlagType
from flagwork.validators import FlagValidator, run_validators

T = TypeVar("T")


class Cell(Generic[T]):
    """Mutable storage for one flag value, owned by the caller."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def get(self) -> T:
        return self.value

    def set(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Cell({self.value!r})"


@dataclass(frozen=True)
class FlagView:
    """Read-only snapshot of a registered flag."""

    name: str
    short_name: str
    flag_type: FlagType
    usage: str
    required: bool
    value: Any


@dataclass
class Flag:
    """
    Represents a command-line flag.

    Attributes:
        flag_type (FlagType): Type tag selecting coercion and the stored value type.
        name (str): Long name, used as `--name`. Unique within its scope.
        short_name (str): Optional short name, used as `-n`.
        storage (Cell | None): Caller-owned cell receiving the parsed value.
        usage (str): Help text.
        required (bool): Whether parsing fails when the flag is never supplied.
        validators (list[FlagValidator]): Checks applied to the coerced value, in order.
        seen (bool): Set once the current parse supplied a value for this flag.
    """

    flag_type: FlagType
    name: str
    short_name: str = ""
    storage: Cell | None = None
    usage: str = ""
    required: bool = False
    validators: list[FlagValidator] = field(default_factory=list)
    seen: bool = field(default=False, compare=False)

    @property
    def display_name(self) -> str:
        """Flag names as shown in messages, e.g. `[-n | --name]`."""
        if self.short_name:
            return f"[-{self.short_name} | --{self.name}]"
        return f"[--{self.name}]"

    @property
    def value(self) -> Any:
        assert self.storage is not None, "storage should not be None"
        return self.storage.value

    @property
    def is_bool(self) -> bool:
        return self.flag_type is FlagType.BOOL

    def validate(self, *validators: FlagValidator) -> Flag:
        """Append validators and return the flag for chaining."""
        self.validators.extend(validators)
        return self

    def require(self) -> Flag:
        """Mark the flag as required and return it for chaining."""
        self.required = True
        return self

    def apply(self, raw: str, empty_bool: bool = True) -> Any:
        """
        Coerce `raw`, run the validators and store the result.

        Storage is only written once both coercion and validation succeed.

        Raises:
            CoercionError: If `raw` cannot be converted to the flag's type.
            FlagValidationError: If a validator rejects the value.
        """
        assert self.storage is not None, "storage should not be None"
        try:
            value = coerce(self.flag_type, raw, empty_bool=empty_bool)
        except CoercionError as error:
            logger.debug("Coercion failed for %s: %s", self.display_name, error.detail)
            raise CoercionError(
                error.flag_type, error.raw, error.detail, flag=self
            ) from error
        run_validators(self.validators, value, self)
        self.storage.value = value
        self.seen = True
        return value

    def mark_true(self) -> None:
        """Store `True` for a boolean flag given without a value."""
        assert self.storage is not None, "storage should not be None"
        self.storage.value = True
        self.seen = True

    def view(self) -> FlagView:
        return FlagView(
            name=self.name,
            short_name=self.short_name,
            flag_type=self.flag_type,
            usage=self.usage,
            required=self.required,
            value=self.storage.value if self.storage is not None else None,
        )


def new_flag(
    flag_type: FlagType | str,
    name: str,
    short_name: str,
    storage: Cell,
    usage: str = "",
    required: bool = False,
    validators: list[FlagValidator] | None = None,
) -> Flag:
    """
    Create a standalone flag that can be shared by several subcommands.

    The flag is not registered anywhere; pass it to `add_flag_ptr()`.
    Registration performs the usual checks.
    """
    if not isinstance(flag_type, FlagType):
        flag_type = FlagType(flag_type)
    return Flag(
        flag_type=flag_type,
        name=name,
        short_name=short_name,
        storage=storage,
        usage=usage,
        required=required,
        validators=list(validators or []),
    )
