import os
from datetime import timedelta
from ipaddress import IPv4Address, IPv6Address
from uuid import UUID

import pytest

from flagwork.exceptions import CoercionError
from flagwork.parser.coerce import HardwareAddress, coerce
from flagwork.parser.flag_type import FlagType


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        ("-7", -7),
        ("+3", 3),
        ("0", 0),
        ("9223372036854775807", 9223372036854775807),
        ("-9223372036854775808", -9223372036854775808),
    ],
)
def test_coerce_int(raw, expected):
    assert coerce(FlagType.INT, raw) == expected
    assert coerce(FlagType.INT64, raw) == expected


@pytest.mark.parametrize(
    "raw", ["", " 42", "4_2", "0x10", "1.0", "abc", "9223372036854775808"]
)
def test_coerce_int_invalid(raw):
    with pytest.raises(CoercionError) as excinfo:
        coerce(FlagType.INT, raw)
    assert excinfo.value.flag_type is FlagType.INT
    assert excinfo.value.raw == raw


@pytest.mark.parametrize(
    "raw, expected",
    [("3.14", 3.14), ("-2", -2.0), ("1e3", 1000.0), (".5", 0.5), ("1.", 1.0)],
)
def test_coerce_float64(raw, expected):
    assert coerce(FlagType.FLOAT64, raw) == expected


def test_coerce_float_special_values():
    assert coerce(FlagType.FLOAT64, "inf") == float("inf")
    assert coerce(FlagType.FLOAT64, "-Infinity") == float("-inf")
    assert coerce(FlagType.FLOAT64, "NaN") != coerce(FlagType.FLOAT64, "NaN")


@pytest.mark.parametrize("raw", ["", "abc", "1,5", "1e309", "--1"])
def test_coerce_float64_invalid(raw):
    with pytest.raises(CoercionError):
        coerce(FlagType.FLOAT64, raw)


def test_coerce_float32_rounds_to_single_precision():
    value = coerce(FlagType.FLOAT32, "0.1")
    assert value == pytest.approx(0.1)
    assert value != 0.1


def test_coerce_float32_out_of_range():
    assert coerce(FlagType.FLOAT32, "3.4e38") == pytest.approx(3.4e38, rel=1e-6)
    with pytest.raises(CoercionError):
        coerce(FlagType.FLOAT32, "1e39")


@pytest.mark.parametrize("raw", ["3.4028235e38", "-3.4028235e38"])
def test_coerce_float32_accepts_largest_value(raw):
    value = coerce(FlagType.FLOAT32, raw)
    assert abs(value) == pytest.approx(3.4028234663852886e38)


@pytest.mark.parametrize("raw", ["3.5e38", "-3.5e38"])
def test_coerce_float32_rejects_overflow(raw):
    with pytest.raises(CoercionError, match="value out of range"):
        coerce(FlagType.FLOAT32, raw)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("TRUE", True),
        ("t", True),
        ("T", True),
        ("1", True),
        ("false", False),
        ("False", False),
        ("f", False),
        ("0", False),
    ],
)
def test_coerce_bool(raw, expected):
    assert coerce(FlagType.BOOL, raw) is expected


@pytest.mark.parametrize("raw", ["yes", "no", "2", "on", " true"])
def test_coerce_bool_invalid(raw):
    with pytest.raises(CoercionError):
        coerce(FlagType.BOOL, raw)


def test_coerce_bool_empty():
    assert coerce(FlagType.BOOL, "") is True
    with pytest.raises(CoercionError):
        coerce(FlagType.BOOL, "", empty_bool=False)


def test_coerce_rune():
    assert coerce(FlagType.RUNE, "x") == "x"
    assert coerce(FlagType.RUNE, "é") == "é"
    for raw in ("", "xy"):
        with pytest.raises(CoercionError):
            coerce(FlagType.RUNE, raw)


def test_coerce_string_is_verbatim():
    assert coerce(FlagType.STRING, "  spaced  ") == "  spaced  "
    assert coerce(FlagType.STRING, "") == ""


def test_coerce_string_list():
    assert coerce(FlagType.STRING_LIST, " a , b,c ") == ["a", "b", "c"]
    assert coerce(FlagType.STRING_LIST, "GET") == ["GET"]
    assert coerce(FlagType.STRING_LIST, "") == [""]


def test_coerce_int_list():
    assert coerce(FlagType.INT_LIST, "1, 2,3") == [1, 2, 3]
    with pytest.raises(CoercionError) as excinfo:
        coerce(FlagType.INT_LIST, "1,a")
    assert "element 'a'" in excinfo.value.detail
    with pytest.raises(CoercionError):
        coerce(FlagType.INT_LIST, "")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("300ms", timedelta(milliseconds=300)),
        ("-1.5h", timedelta(hours=-1.5)),
        ("+5s", timedelta(seconds=5)),
        ("2h45m10s", timedelta(hours=2, minutes=45, seconds=10)),
        ("10us", timedelta(microseconds=10)),
        ("10µs", timedelta(microseconds=10)),
        ("1500ns", timedelta(microseconds=1)),
        ("0", timedelta(0)),
        ("-0", timedelta(0)),
    ],
)
def test_coerce_duration(raw, expected):
    assert coerce(FlagType.DURATION, raw) == expected


def test_coerce_duration_total_seconds():
    assert coerce(FlagType.DURATION, "1h30m").total_seconds() == 5400


@pytest.mark.parametrize(
    "raw, detail",
    [
        ("", "empty duration"),
        ("1", "missing unit"),
        ("1h30", "missing unit"),
        ("1x", "unknown unit"),
        ("h", "malformed number"),
        ("1.5.5s", "missing unit"),
        ("9999999999h", "duration out of range"),
    ],
)
def test_coerce_duration_invalid(raw, detail):
    with pytest.raises(CoercionError) as excinfo:
        coerce(FlagType.DURATION, raw)
    assert detail in excinfo.value.detail


def test_coerce_timestamp_utc():
    value = coerce(FlagType.TIMESTAMP, "2022-01-01T00:00 UTC")
    assert (value.year, value.month, value.day, value.hour, value.minute) == (
        2022,
        1,
        1,
        0,
        0,
    )
    assert value.utcoffset() == timedelta(0)


def test_coerce_timestamp_unknown_zone_has_zero_offset():
    value = coerce(FlagType.TIMESTAMP, "2024-06-30T12:15 XYZ")
    assert value.utcoffset() == timedelta(0)
    assert value.tzname() == "XYZ"


@pytest.mark.parametrize(
    "raw",
    [
        "2022-01-01 00:00 UTC",
        "2022-01-01T00:00",
        "2022-01-01T00:00:00 UTC",
        "2022-13-01T00:00 UTC",
        "2022-01-01T00:00 utc",
        "01/01/2022",
    ],
)
def test_coerce_timestamp_invalid(raw):
    with pytest.raises(CoercionError):
        coerce(FlagType.TIMESTAMP, raw)


def test_coerce_ip():
    assert coerce(FlagType.IP_ADDRESS, "127.0.0.1") == IPv4Address("127.0.0.1")
    assert coerce(FlagType.IP_ADDRESS, "::1") == IPv6Address("::1")
    for raw in ("256.0.0.1", "localhost", ""):
        with pytest.raises(CoercionError):
            coerce(FlagType.IP_ADDRESS, raw)


@pytest.mark.parametrize(
    "raw", ["00:00:5e:00:53:01", "00-00-5E-00-53-01", "0000.5e00.5301"]
)
def test_coerce_mac(raw):
    value = coerce(FlagType.MAC_ADDRESS, raw)
    assert isinstance(value, HardwareAddress)
    assert value == bytes([0x00, 0x00, 0x5E, 0x00, 0x53, 0x01])
    assert str(value) == "00:00:5e:00:53:01"


def test_coerce_mac_eui64():
    value = coerce(FlagType.MAC_ADDRESS, "02:00:5e:10:00:00:00:01")
    assert len(value) == 8


@pytest.mark.parametrize(
    "raw",
    ["", "00:00:5e:00:53", "0:0:5e:0:53:1", "zz:00:5e:00:53:01", "00:00-5e:00:53:01"],
)
def test_coerce_mac_invalid(raw):
    with pytest.raises(CoercionError):
        coerce(FlagType.MAC_ADDRESS, raw)


def test_coerce_url():
    value = coerce(FlagType.URL, "https://example.com:8443/path?q=1")
    assert value.scheme == "https"
    assert value.hostname == "example.com"
    assert value.port == 8443
    assert value.path == "/path"


@pytest.mark.parametrize(
    "raw",
    [
        "/index.html",
        "example.com",
        "mailto:someone@example.com",
        "http://exa mple.com",
        "http://example.com:99999",
        "",
    ],
)
def test_coerce_url_invalid(raw):
    with pytest.raises(CoercionError):
        coerce(FlagType.URL, raw)


def test_coerce_uuid():
    raw = "123e4567-e89b-12d3-a456-426614174000"
    assert coerce(FlagType.UUID, raw) == UUID(raw)
    for invalid in (
        "123e4567e89b12d3a456426614174000",
        "{123e4567-e89b-12d3-a456-426614174000}",
        "123e4567-e89b-12d3-a456-42661417400",
    ):
        with pytest.raises(CoercionError):
            coerce(FlagType.UUID, invalid)


@pytest.mark.parametrize("raw", ["localhost:8080", ":8000", "127.0.0.1:0", "h:65535"])
def test_coerce_host_port(raw):
    assert coerce(FlagType.HOST_PORT, raw) == raw


@pytest.mark.parametrize(
    "raw", ["localhost", "localhost:", "localhost:abc", "localhost:70000", "h:-1", "::1:80"]
)
def test_coerce_host_port_invalid(raw):
    with pytest.raises(CoercionError):
        coerce(FlagType.HOST_PORT, raw)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("john@example.com", "john@example.com"),
        ("John Doe <john@example.com>", "john@example.com"),
    ],
)
def test_coerce_email(raw, expected):
    assert coerce(FlagType.EMAIL, raw) == expected


@pytest.mark.parametrize("raw", ["", "not-an-email", "a@b.com, c@d.com"])
def test_coerce_email_invalid(raw):
    with pytest.raises(CoercionError):
        coerce(FlagType.EMAIL, raw)


def test_coerce_file_path(tmp_path, monkeypatch):
    target = tmp_path / "a.txt"
    target.write_text("data")
    assert coerce(FlagType.FILE_PATH, str(target)) == os.path.abspath(str(target))

    monkeypatch.chdir(tmp_path)
    assert coerce(FlagType.FILE_PATH, "a.txt") == os.path.join(os.getcwd(), "a.txt")


def test_coerce_file_path_rejects_directory(tmp_path):
    with pytest.raises(CoercionError) as excinfo:
        coerce(FlagType.FILE_PATH, str(tmp_path))
    assert "not a regular file" in str(excinfo.value)


def test_coerce_file_path_missing(tmp_path):
    with pytest.raises(CoercionError) as excinfo:
        coerce(FlagType.FILE_PATH, str(tmp_path / "missing.txt"))
    assert "can not stat" in excinfo.value.detail


def test_coerce_dir_path(tmp_path):
    assert coerce(FlagType.DIR_PATH, str(tmp_path)) == os.path.abspath(str(tmp_path))
    target = tmp_path / "a.txt"
    target.write_text("data")
    with pytest.raises(CoercionError) as excinfo:
        coerce(FlagType.DIR_PATH, str(target))
    assert "not a directory" in str(excinfo.value)
    with pytest.raises(CoercionError):
        coerce(FlagType.DIR_PATH, str(tmp_path / "missing"))


def test_coerce_accepts_type_names():
    assert coerce("int", "5") == 5
    assert coerce("integer", "5") == 5
    assert coerce("string-list", "a,b") == ["a", "b"]
    with pytest.raises(ValueError):
        coerce("complex", "1")


def test_coercion_error_message():
    with pytest.raises(CoercionError) as excinfo:
        coerce(FlagType.INT, "abc")
    assert str(excinfo.value) == "invalid int value 'abc': not a base-10 integer"
