# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagType`, the enum tagging every registered flag with the kind of
value it stores.

The tag selects the coercion routine used while parsing, and `python_types`
describes which Python type(s) a flag's storage cell is expected to hold once
a value has been parsed. Together with `Cell`, this forms a tagged storage
model: the cell owns the value, the tag describes it.

Example:
    FlagType("duration")   → FlagType.DURATION
    FlagType("ip")         → FlagType.IP_ADDRESS (via alias)
"""
from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from urllib.parse import SplitResult
from uuid import UUID


class FlagType(Enum):
    """
    The value type of a flag.

    Members:
        STRING: Raw string, stored as-is.
        INT / INT64: Signed base-10 integers (64-bit range).
        FLOAT32 / FLOAT64: Floating point at single or double precision.
        BOOL: Boolean; may appear without a value.
        RUNE: A single character.
        DURATION: Go-style duration such as `1h30m`, stored as `timedelta`.
        STRING_LIST / INT_LIST: Comma separated lists.
        TIMESTAMP: `YYYY-MM-DDTHH:MM ZONE`, stored as an aware `datetime`.
        IP_ADDRESS: IPv4 or IPv6 address.
        MAC_ADDRESS: Hardware address of 6, 8 or 20 octets.
        URL: Absolute URL, stored as `urllib.parse.SplitResult`.
        UUID: Canonical hyphenated UUID.
        HOST_PORT: `host:port` pair, stored verbatim.
        EMAIL: RFC 5322 mailbox, stored as the bare address.
        FILE_PATH / DIR_PATH: Existing file or directory, stored as an absolute path.
    """

    STRING = "string"
    INT = "int"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    RUNE = "rune"
    DURATION = "duration"
    STRING_LIST = "string_list"
    INT_LIST = "int_list"
    TIMESTAMP = "timestamp"
    IP_ADDRESS = "ip_address"
    MAC_ADDRESS = "mac_address"
    URL = "url"
    UUID = "uuid"
    HOST_PORT = "host_port"
    EMAIL = "email"
    FILE_PATH = "file_path"
    DIR_PATH = "dir_path"

    @classmethod
    def choices(cls) -> list[FlagType]:
        """Return a list of all flag types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "integer": "int",
            "float": "float64",
            "boolean": "bool",
            "char": "rune",
            "time": "timestamp",
            "ip": "ip_address",
            "mac": "mac_address",
            "hostport": "host_port",
            "file": "file_path",
            "dir": "dir_path",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FlagType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = cls._get_alias(value.strip().lower().replace("-", "_"))
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def label(self) -> str:
        """Short human readable name used in messages and help output."""
        return self.value.replace("_", " ")

    @property
    def python_types(self) -> tuple[type, ...]:
        """Python type(s) a storage cell of this flag type holds after parsing."""
        from flagwork.parser.coerce import HardwareAddress

        return {
            FlagType.STRING: (str,),
            FlagType.INT: (int,),
            FlagType.INT64: (int,),
            FlagType.FLOAT32: (float,),
            FlagType.FLOAT64: (float,),
            FlagType.BOOL: (bool,),
            FlagType.RUNE: (str,),
            FlagType.DURATION: (timedelta,),
            FlagType.STRING_LIST: (list,),
            FlagType.INT_LIST: (list,),
            FlagType.TIMESTAMP: (datetime,),
            FlagType.IP_ADDRESS: (IPv4Address, IPv6Address),
            FlagType.MAC_ADDRESS: (HardwareAddress,),
            FlagType.URL: (SplitResult,),
            FlagType.UUID: (UUID,),
            FlagType.HOST_PORT: (str,),
            FlagType.EMAIL: (str,),
            FlagType.FILE_PATH: (str,),
            FlagType.DIR_PATH: (str,),
        }[self]

    def __str__(self) -> str:
        """Return the string representation of the flag type."""
        return self.value
