# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains the type coercion engine for Flagwork argument parsing.

Every `FlagType` maps to one pure function converting a raw command-line string
into a typed Python value. Failures raise `CoercionError` carrying the flag type,
the offending raw string and a short detail message; callers never receive a
partially converted value.

Functions:
- coerce: Dispatch a raw string to the coercion routine of a flag type.
- parse_int / parse_float / parse_bool / parse_rune: Scalar conversions.
- parse_string_list / parse_int_list: Comma separated lists.
- parse_duration: Go-style durations such as `1h30m` or `250ms`.
- parse_timestamp: The fixed `YYYY-MM-DDTHH:MM ZONE` layout.
- parse_ip / parse_mac / parse_url / parse_uuid / parse_host_port / parse_email:
  Network and identifier values.
- parse_file_path / parse_dir_path: Existing filesystem paths (the only
  routines performing I/O).
"""
from __future__ import annotations

import math
import os
import re
import stat
import struct
from datetime import datetime, timedelta, tzinfo
from decimal import Decimal, InvalidOperation
from email.errors import HeaderParseError
from email.headerregistry import HeaderRegistry
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Any, Callable
from urllib.parse import SplitResult, urlsplit
from uuid import UUID

from dateutil import tz

from flagwork.exceptions import CoercionError
from flagwork.parser.flag_type import FlagType

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
MAX_PORT = (1 << 16) - 1
TIMESTAMP_LAYOUT = "YYYY-MM-DDTHH:MM ZONE"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_DURATION_COMPONENT = re.compile(r"(?P<number>[0-9]*(?:\.[0-9]*)?)(?P<unit>[^0-9.]*)")
_TIMESTAMP_PATTERN = re.compile(
    r"(?P<stamp>[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}) (?P<zone>[A-Z]{3,5})"
)
_HEX_OCTET = re.compile(r"[0-9A-Fa-f]{2}")
_UUID_PATTERN = re.compile(
    r"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}"
)

_TRUE_VALUES = {"true", "t", "1"}
_FALSE_VALUES = {"false", "f", "0"}

# nanoseconds per unit
_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_MAC_OCTET_COUNTS = (6, 8, 20)

_header_factory = HeaderRegistry()


class HardwareAddress(bytes):
    """A MAC (hardware) address: 6, 8 or 20 raw octets."""

    def __str__(self) -> str:
        return ":".join(f"{octet:02x}" for octet in self)

    def __repr__(self) -> str:
        return f"HardwareAddress('{self}')"


def parse_int(value: str, flag_type: FlagType = FlagType.INT) -> int:
    """
    Convert a string to a signed 64-bit integer.

    Only base-10 digits with an optional sign are accepted; whitespace,
    underscores and other bases are rejected.

    Raises:
        CoercionError: If the string is not an integer or overflows 64 bits.
    """
    if not _INT_PATTERN.fullmatch(value):
        raise CoercionError(flag_type, value, "not a base-10 integer")
    result = int(value)
    if not INT64_MIN <= result <= INT64_MAX:
        raise CoercionError(flag_type, value, "value out of range")
    return result


def parse_float(value: str, flag_type: FlagType = FlagType.FLOAT64) -> float:
    """
    Convert a string to a float at the precision implied by `flag_type`.

    FLOAT32 values are rounded to single precision and fail only when the
    rounded value overflows to infinity.

    Raises:
        CoercionError: If the string is not a number or the value is out of range.
    """
    if not _FLOAT_PATTERN.fullmatch(value):
        raise CoercionError(flag_type, value, "not a floating point number")
    result = float(value)
    if math.isinf(result) and "inf" not in value.lower():
        raise CoercionError(flag_type, value, "value out of range")
    if flag_type is FlagType.FLOAT32:
        try:
            packed = struct.pack("f", result)
        except OverflowError as error:
            raise CoercionError(flag_type, value, "value out of range") from error
        result = struct.unpack("f", packed)[0]
    return result


def parse_bool(value: str, empty_bool: bool = True) -> bool:
    """
    Convert a string to a boolean.

    Accepts `true/false/1/0/t/f` in any case. An empty string is `True` when
    `empty_bool` is set (a bare `--flag=`), otherwise it is rejected.

    Raises:
        CoercionError: If the string is not a recognised boolean spelling.
    """
    if value == "" and empty_bool:
        return True
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise CoercionError(FlagType.BOOL, value, "expected one of true/false/1/0/t/f")


def parse_rune(value: str) -> str:
    """Return the single character in `value`."""
    if len(value) != 1:
        raise CoercionError(FlagType.RUNE, value, "expected exactly one character")
    return value


def parse_string_list(value: str) -> list[str]:
    """Split on commas and strip each element. An empty string yields `[""]`."""
    return [part.strip() for part in value.split(",")]


def parse_int_list(value: str) -> list[int]:
    """Split on commas and parse each stripped element as an integer."""
    result = []
    for part in parse_string_list(value):
        try:
            result.append(parse_int(part, FlagType.INT_LIST))
        except CoercionError as error:
            raise CoercionError(
                FlagType.INT_LIST, value, f"element {part!r}: {error.detail}"
            ) from error
    return result


def parse_duration(value: str) -> timedelta:
    """
    Convert a Go-style duration string to a `timedelta`.

    A duration is an optionally signed sequence of decimal numbers, each with an
    optional fraction and a unit suffix, such as `300ms`, `-1.5h` or `2h45m`.
    Valid units are `ns`, `us` (or `µs`), `ms`, `s`, `m` and `h`. A lone `0`
    needs no unit. Precision below one microsecond is truncated.

    Raises:
        CoercionError: On a malformed number, a missing or unknown unit, or overflow.
    """
    text = value
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise CoercionError(FlagType.DURATION, value, "empty duration")

    total = Decimal(0)
    position = 0
    while position < len(text):
        match = _DURATION_COMPONENT.match(text, position)
        assert match is not None, "duration component pattern always matches"
        number, unit = match["number"], match["unit"]
        if number in ("", "."):
            raise CoercionError(FlagType.DURATION, value, "malformed number")
        if not unit:
            raise CoercionError(FlagType.DURATION, value, "missing unit")
        if unit not in _DURATION_UNITS:
            raise CoercionError(FlagType.DURATION, value, f"unknown unit {unit!r}")
        try:
            total += Decimal(number) * _DURATION_UNITS[unit]
        except InvalidOperation as error:
            raise CoercionError(FlagType.DURATION, value, "malformed number") from error
        position = match.end()

    nanoseconds = int(total)
    if nanoseconds > INT64_MAX:
        raise CoercionError(FlagType.DURATION, value, "duration out of range")
    microseconds = nanoseconds // 1_000
    return timedelta(microseconds=-microseconds if negative else microseconds)


def _resolve_zone(zone: str) -> tzinfo:
    if zone in ("UTC", "GMT"):
        return tz.UTC
    resolved = tz.gettz(zone)
    if resolved is None:
        # Unknown abbreviations keep their name with a zero offset.
        return tz.tzoffset(zone, 0)
    return resolved


def parse_timestamp(value: str) -> datetime:
    """
    Parse a timestamp in the single supported layout `YYYY-MM-DDTHH:MM ZONE`.

    Example: `2022-01-01T00:00 UTC`. The zone must be an upper case
    abbreviation; no other layout is negotiated.

    Raises:
        CoercionError: If the value does not match the layout.
    """
    match = _TIMESTAMP_PATTERN.fullmatch(value)
    if not match:
        raise CoercionError(
            FlagType.TIMESTAMP, value, f"supported format: {TIMESTAMP_LAYOUT}"
        )
    try:
        naive = datetime.strptime(match["stamp"], "%Y-%m-%dT%H:%M")
    except ValueError as error:
        raise CoercionError(FlagType.TIMESTAMP, value, str(error)) from error
    return naive.replace(tzinfo=_resolve_zone(match["zone"]))


def parse_ip(value: str) -> IPv4Address | IPv6Address:
    """Parse a dotted-quad IPv4 or colon-hex IPv6 address."""
    try:
        return ip_address(value)
    except ValueError as error:
        raise CoercionError(
            FlagType.IP_ADDRESS, value, "not a valid IP address"
        ) from error


def _hex_octet(value: str, part: str) -> int:
    if not _HEX_OCTET.fullmatch(part):
        raise CoercionError(FlagType.MAC_ADDRESS, value, f"invalid octet {part!r}")
    return int(part, 16)


def parse_mac(value: str) -> HardwareAddress:
    """
    Parse an IEEE 802 MAC-48, EUI-48, EUI-64 or 20-octet InfiniBand address.

    Accepted notations:
        00:00:5e:00:53:01
        00-00-5e-00-53-01
        0000.5e00.5301
    """
    invalid = CoercionError(FlagType.MAC_ADDRESS, value, "invalid MAC address")
    if len(value) < 14:
        raise invalid

    octets: list[int] = []
    if value[2] in (":", "-"):
        if (len(value) + 1) % 3 != 0:
            raise invalid
        count = (len(value) + 1) // 3
        if count not in _MAC_OCTET_COUNTS:
            raise invalid
        separator = value[2]
        for index in range(count):
            offset = index * 3
            if index < count - 1 and value[offset + 2] != separator:
                raise invalid
            octets.append(_hex_octet(value, value[offset : offset + 2]))
    elif value[4] == ".":
        if (len(value) + 1) % 5 != 0:
            raise invalid
        count = 2 * (len(value) + 1) // 5
        if count not in _MAC_OCTET_COUNTS:
            raise invalid
        for index in range(0, count, 2):
            offset = index // 2 * 5
            if index < count - 2 and value[offset + 4] != ".":
                raise invalid
            octets.append(_hex_octet(value, value[offset : offset + 2]))
            octets.append(_hex_octet(value, value[offset + 2 : offset + 4]))
    else:
        raise invalid
    return HardwareAddress(octets)


def parse_url(value: str) -> SplitResult:
    """
    Parse an absolute URL. Both a scheme and a host are required, so relative
    references such as `/index.html` or `example.com` are rejected.
    """
    if any(char.isspace() for char in value):
        raise CoercionError(FlagType.URL, value, "URL must not contain whitespace")
    try:
        parts = urlsplit(value)
        _port = parts.port  # raises on a non-numeric or out of range port
    except ValueError as error:
        raise CoercionError(FlagType.URL, value, str(error)) from error
    if not parts.scheme or not parts.hostname:
        raise CoercionError(
            FlagType.URL, value, "absolute URL with scheme and host required"
        )
    return parts


def parse_uuid(value: str) -> UUID:
    """Parse a canonical 36-character hyphenated UUID."""
    if not _UUID_PATTERN.fullmatch(value):
        raise CoercionError(
            FlagType.UUID, value, "expected xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"
        )
    return UUID(value)


def parse_host_port(value: str) -> str:
    """
    Validate a `host:port` pair and return it unchanged.

    The value is split on the first colon only, so bracketed IPv6 hosts are not
    supported. The host part is not checked; an empty host (`:8000`) is valid.
    """
    _host, separator, port = value.partition(":")
    if not separator:
        raise CoercionError(FlagType.HOST_PORT, value, "expected host:port")
    if not _INT_PATTERN.fullmatch(port):
        raise CoercionError(FlagType.HOST_PORT, value, f"{port!r} is not a valid port")
    if not 0 <= int(port) <= MAX_PORT:
        raise CoercionError(FlagType.HOST_PORT, value, f"port {port} is out of range")
    return value


def parse_email(value: str) -> str:
    """
    Parse a single RFC 5322 mailbox and return its bare address.

    `John Doe <john@example.com>` and `john@example.com` both yield
    `john@example.com`; the display name is discarded.
    """
    try:
        header = _header_factory("to", value)
        addresses = header.addresses
    except (HeaderParseError, ValueError, IndexError) as error:
        raise CoercionError(FlagType.EMAIL, value, "unable to parse email") from error
    if header.defects or len(addresses) != 1:
        raise CoercionError(FlagType.EMAIL, value, "expected a single mailbox")
    address = addresses[0]
    if not address.username or not address.domain:
        raise CoercionError(FlagType.EMAIL, value, "missing local part or domain")
    return address.addr_spec


def _stat_path(value: str, flag_type: FlagType) -> tuple[str, os.stat_result]:
    path = os.path.abspath(value)
    try:
        return path, os.stat(path)
    except OSError as error:
        raise CoercionError(
            flag_type, value, f"can not stat: {error.strerror or error}"
        ) from error


def parse_file_path(value: str) -> str:
    """Resolve `value` against the working directory; it must be an existing non-directory."""
    path, info = _stat_path(value, FlagType.FILE_PATH)
    if stat.S_ISDIR(info.st_mode):
        raise CoercionError(FlagType.FILE_PATH, value, f"{value} is not a regular file")
    return path


def parse_dir_path(value: str) -> str:
    """Resolve `value` against the working directory; it must be an existing directory."""
    path, info = _stat_path(value, FlagType.DIR_PATH)
    if not stat.S_ISDIR(info.st_mode):
        raise CoercionError(FlagType.DIR_PATH, value, f"{value} is not a directory")
    return path


_COERCERS: dict[FlagType, Callable[[str], Any]] = {
    FlagType.STRING: str,
    FlagType.INT: lambda value: parse_int(value, FlagType.INT),
    FlagType.INT64: lambda value: parse_int(value, FlagType.INT64),
    FlagType.FLOAT32: lambda value: parse_float(value, FlagType.FLOAT32),
    FlagType.FLOAT64: lambda value: parse_float(value, FlagType.FLOAT64),
    FlagType.RUNE: parse_rune,
    FlagType.DURATION: parse_duration,
    FlagType.STRING_LIST: parse_string_list,
    FlagType.INT_LIST: parse_int_list,
    FlagType.TIMESTAMP: parse_timestamp,
    FlagType.IP_ADDRESS: parse_ip,
    FlagType.MAC_ADDRESS: parse_mac,
    FlagType.URL: parse_url,
    FlagType.UUID: parse_uuid,
    FlagType.HOST_PORT: parse_host_port,
    FlagType.EMAIL: parse_email,
    FlagType.FILE_PATH: parse_file_path,
    FlagType.DIR_PATH: parse_dir_path,
}


def coerce(flag_type: FlagType | str, raw: str, *, empty_bool: bool = True) -> Any:
    """
    Convert a raw command-line string to the value type of `flag_type`.

    Args:
        flag_type (FlagType | str): The target flag type (or its name).
        raw (str): The raw token as supplied on the command line.
        empty_bool (bool): Whether an empty string counts as `True` for BOOL.

    Returns:
        Any: The coerced value.

    Raises:
        CoercionError: If conversion fails.
    """
    if not isinstance(flag_type, FlagType):
        flag_type = FlagType(flag_type)
    if flag_type is FlagType.BOOL:
        return parse_bool(raw, empty_bool=empty_bool)
    return _COERCERS[flag_type](raw)
