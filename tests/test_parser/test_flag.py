import pytest

from flagwork.exceptions import CoercionError, FlagValidationError
from flagwork.parser import Cell, Flag, FlagType
from flagwork.validators import minimum


def test_display_name():
    assert Flag(FlagType.STRING, "name", "n", Cell("")).display_name == "[-n | --name]"
    assert Flag(FlagType.STRING, "name", "", Cell("")).display_name == "[--name]"


def test_apply_stores_value_and_marks_seen():
    storage = Cell(0)
    flag = Flag(FlagType.INT, "port", "p", storage)
    assert flag.apply("8080") == 8080
    assert storage.value == 8080
    assert flag.seen is True


def test_failed_coercion_leaves_storage_untouched():
    storage = Cell(42)
    flag = Flag(FlagType.INT, "port", "p", storage)
    with pytest.raises(CoercionError) as excinfo:
        flag.apply("abc")
    assert excinfo.value.flag is flag
    assert "[-p | --port]" in str(excinfo.value)
    assert storage.value == 42
    assert flag.seen is False


def test_failed_validation_leaves_storage_untouched():
    storage = Cell(10)
    flag = Flag(FlagType.INT, "port", "p", storage, validators=[minimum(1)])
    with pytest.raises(FlagValidationError) as excinfo:
        flag.apply("0")
    assert storage.value == 10
    assert excinfo.value.message == "value 0 is less than minimum value: 1"
    assert str(excinfo.value) == (
        "invalid value for flag [-p | --port]: value 0 is less than minimum value: 1"
    )


def test_mark_true():
    storage = Cell(False)
    flag = Flag(FlagType.BOOL, "verbose", "v", storage)
    flag.mark_true()
    assert storage.value is True
    assert flag.seen is True


def test_cell():
    cell = Cell("a")
    cell.set("b")
    assert cell.get() == "b"
    assert repr(cell) == "Cell('b')"
