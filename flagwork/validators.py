# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value validators for Flagwork flags.

A flag validator is a callable receiving the already-coerced value of a flag and
returning `(ok, message)`. Validators attached to a flag run in registration
order after coercion; the first failure stops the pipeline and its message is
reported.

Included Validators:
- choices: The value must be one of a fixed set.
- min_length / max_length: String length bounds.
- minimum / maximum: Numeric (or otherwise ordered) bounds.
- value_range: Inclusive lower and upper bound.

Also provides `FlagValueValidator`, a Prompt Toolkit `Validator` that runs a
flag's coercion and validators over interactive input.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence

from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError, Validator

from flagwork.exceptions import FlagValidationError, ParseError
from flagwork.logger import logger

if TYPE_CHECKING:
    from flagwork.parser.flag import Flag

FlagValidator = Callable[[Any], tuple[bool, str]]


def run_validators(
    validators: Sequence[FlagValidator], value: Any, flag: Flag | None = None
) -> None:
    """
    Apply `validators` to `value` in order.

    A validator that raises instead of returning (for example a numeric bound
    given a string) counts as a failure.

    Raises:
        FlagValidationError: With the message of the first failing validator.
    """
    for validator in validators:
        try:
            result = validator(value)
        except Exception as error:
            logger.debug("Validator %r raised for %r: %s", validator, value, error)
            raise FlagValidationError(f"validator error: {error}", flag) from error
        if isinstance(result, bool):
            ok, message = result, ""
        else:
            ok, message = result
        if not ok:
            raise FlagValidationError(message or f"invalid value {value!r}", flag)


def choices(values: Iterable[Any]) -> FlagValidator:
    """Validator for membership in a fixed set of values."""
    allowed = list(values)

    def validate(value: Any) -> tuple[bool, str]:
        if value in allowed:
            return True, ""
        expected = ", ".join(str(choice) for choice in allowed)
        return False, f"{value} is not a valid choice. Expected one of {{{expected}}}"

    return validate


def min_length(length: int) -> FlagValidator:
    """Validator for a minimum string length."""

    def validate(value: Any) -> tuple[bool, str]:
        if not isinstance(value, str):
            return False, "min_length must be used only with strings"
        if len(value) < length:
            return False, f"{value!r} is shorter than {length} characters"
        return True, ""

    return validate


def max_length(length: int) -> FlagValidator:
    """Validator for a maximum string length."""

    def validate(value: Any) -> tuple[bool, str]:
        if not isinstance(value, str):
            return False, "max_length must be used only with strings"
        if len(value) > length:
            return False, f"{value!r} is longer than {length} characters"
        return True, ""

    return validate


def _compare(value: Any, bound: Any, check: Callable[[Any, Any], bool]) -> bool | None:
    try:
        return check(value, bound)
    except TypeError:
        return None


def minimum(min_value: Any) -> FlagValidator:
    """Validator for a lower bound (inclusive)."""

    def validate(value: Any) -> tuple[bool, str]:
        ok = _compare(value, min_value, lambda v, b: v >= b)
        if ok is None:
            return False, f"cannot compare {value!r} with {min_value!r}"
        return ok, f"value {value} is less than minimum value: {min_value}"

    return validate


def maximum(max_value: Any) -> FlagValidator:
    """Validator for an upper bound (inclusive)."""

    def validate(value: Any) -> tuple[bool, str]:
        ok = _compare(value, max_value, lambda v, b: v <= b)
        if ok is None:
            return False, f"cannot compare {value!r} with {max_value!r}"
        return ok, f"value {value} is greater than maximum value: {max_value}"

    return validate


def value_range(min_value: Any, max_value: Any) -> FlagValidator:
    """Validator for an inclusive range. Both boundaries are valid values."""

    def validate(value: Any) -> tuple[bool, str]:
        ok = _compare(value, (min_value, max_value), lambda v, b: b[0] <= v <= b[1])
        if ok is None:
            return False, f"cannot compare {value!r} with [{min_value}, {max_value}]"
        return ok, f"value {value} is not in range [{min_value}, {max_value}]"

    return validate


class FlagValueValidator(Validator):
    """Prompt Toolkit validator checking input the same way the parser would."""

    def __init__(self, flag: Flag, empty_bool: bool = True) -> None:
        self.flag = flag
        self.empty_bool = empty_bool
        super().__init__()

    def validate(self, document: Document) -> None:
        from flagwork.parser.coerce import coerce

        text = document.text.strip()
        try:
            value = coerce(self.flag.flag_type, text, empty_bool=self.empty_bool)
            run_validators(self.flag.validators, value, self.flag)
        except ParseError as error:
            raise ValidationError(
                message=str(error), cursor_position=len(document.text)
            ) from error
