import math
from datetime import datetime, timedelta, timezone
from fractions import Fraction

import pytest

from xlsxcells.cell import Cell, RowNotFoundError
from xlsxcells.celltype import CellType, DateTimeOptions, Hyperlink
from xlsxcells.dates import time_to_excel_time
from xlsxcells.styles import Font, RichTextFont, RichTextRun, Style
from xlsxcells.validation import new_data_validation


class _LockedStoreRow:
    def __init__(self, allowed):
        self.allowed = allowed

    def cell_updatable(self, cell):
        if cell is not self.allowed:
            raise RuntimeError("not the current cell")


class _Row:
    def __init__(self, store_row):
        self.cell_store_row = store_row


def test_new_cell_is_unmodified():
    assert Cell().is_modified() is False


def test_setting_value_marks_modified():
    cell = Cell()
    cell.value = "A string"
    assert cell.is_modified() is True


def test_get_style_returns_existing_style():
    style = Style(font=Font(size=10, name="Calibra"))
    cell = Cell(value="123", style=style, orig_value="123")
    got = cell.get_style()
    assert got.font.size == 10.0
    assert got.font.name == "Calibra"
    assert cell.is_modified() is False


def test_get_style_creates_default():
    cell = Cell()
    assert cell.get_style() == Style()
    assert cell.get_style() is cell.get_style()


def test_set_style_marks_modified():
    cell = Cell()
    style = Style(font=Font(size=12, name="Calibra"))
    cell.set_style(style)
    assert cell.get_style().font.name == "Calibra"
    assert cell.is_modified() is True


def test_set_float_with_format():
    cell = Cell()
    cell.set_float_with_format(37947.75334343, "yyyy/mm/dd")
    assert cell.value == "37947.75334343"
    assert cell.num_fmt == "yyyy/mm/dd"
    assert cell.cell_type is CellType.NUMERIC
    assert cell.is_modified() is True


@pytest.mark.parametrize(
    "number, text",
    [(0, "0"), (0.000005, "0.000005"), (100.0, "100"), (37947.75334343, "37947.75334343")],
)
def test_set_float(number, text):
    cell = Cell()
    cell.set_float(number)
    assert cell.value == text
    assert cell.is_modified() is True


def test_get_time():
    cell = Cell()
    cell.set_float(0)
    assert cell.get_time(False) == datetime(1899, 12, 30, tzinfo=timezone.utc)
    cell.set_float(39813.0)
    assert cell.get_time(True) == datetime(2013, 1, 1, tzinfo=timezone.utc)
    cell.value = "d"
    with pytest.raises(ValueError):
        cell.get_time(False)
    assert cell.is_modified() is True


def test_setters_and_getters():
    cell = Cell()
    cell.set_string("hello world")
    assert cell.value == "hello world"
    assert cell.cell_type is CellType.STRING

    cell = Cell()
    cell.set_int(1024)
    assert cell.as_int() == 1024
    assert cell.num_fmt == "general"
    assert cell.cell_type is CellType.NUMERIC

    cell = Cell()
    cell.set_int64(1024)
    assert cell.as_int64() == 1024
    assert cell.num_fmt == "general"

    cell = Cell()
    cell.set_float(1.024)
    assert cell.as_float() == 1.024
    assert cell.as_int() == 1
    assert cell.cell_type is CellType.NUMERIC

    cell = Cell()
    cell.set_formula("10+20")
    assert cell.is_modified() is True
    assert cell.formula == "10+20"
    assert cell.cell_type is CellType.NUMERIC

    cell = Cell()
    cell.set_string_formula("A1")
    assert cell.formula == "A1"
    assert cell.cell_type is CellType.STRING_FORMULA


def test_as_int64_rejects_fraction_and_overflow():
    cell = Cell(value="1.5")
    with pytest.raises(ValueError):
        cell.as_int64()
    cell.value = "9223372036854775808"
    with pytest.raises(ValueError):
        cell.as_int64()


def test_as_float_rejects_text():
    with pytest.raises(ValueError):
        Cell(value="Fudge Cake").as_float()


def test_bool():
    cell = Cell()
    cell.set_bool(True)
    assert cell.is_modified() is True
    assert cell.value == "1"
    assert cell.as_bool() is True
    cell.set_bool(False)
    assert cell.value == "0"
    assert cell.as_bool() is False


def test_string_bool():
    cell = Cell()
    cell.set_int(0)
    assert cell.as_bool() is False
    cell.set_int(1)
    assert cell.as_bool() is True
    cell.set_string("")
    assert cell.as_bool() is False
    cell.set_string("0")
    assert cell.as_bool() is True


@pytest.mark.parametrize("number", [1, 2**40])
def test_set_value_int(number):
    cell = Cell()
    cell.set_value(number)
    assert cell.as_int64() == number
    assert cell.is_modified() is True


def test_set_value_floats():
    cell = Cell()
    cell.set_value(1.11)
    assert cell.as_float() == 1.11
    cell.set_value(0.000001)
    assert cell.value == "0.000001"
    assert cell.as_float() == 0.000001
    cell.set_value(1e18)
    assert cell.value == "1000000000000000000"


def test_set_value_time():
    cell = Cell()
    cell.set_value(datetime.fromtimestamp(0, timezone.utc))
    assert math.floor(cell.as_float()) == 25569.0
    assert cell.is_modified() is True


@pytest.mark.parametrize("empty", [None, "", b""])
def test_set_value_empty(empty):
    cell = Cell()
    cell.set_value(empty)
    assert cell.value == ""
    assert cell.is_modified() is True


def test_set_value_other():
    cell = Cell()
    cell.set_value(Fraction(1, 3))
    assert cell.value == "1/3"
    assert cell.cell_type is CellType.STRING


def test_set_date_with_options():
    cell = Cell()
    cell.set_date(datetime.fromtimestamp(0, timezone.utc))
    assert math.floor(cell.as_float()) == 25569.0
    assert cell.num_fmt == "mm-dd-yy"

    moment = datetime(2016, 1, 1, 12, tzinfo=timezone.utc)
    new_york_winter = timezone(timedelta(hours=-5))
    cell.set_date_with_options(moment, DateTimeOptions(new_york_winter, "test_format1"))
    assert cell.as_float() == time_to_excel_time(
        datetime(2016, 1, 1, 7, tzinfo=timezone.utc), False
    )
    assert cell.num_fmt == "test_format1"

    tokyo = timezone(timedelta(hours=9))
    cell.set_date_with_options(moment, DateTimeOptions(tokyo, "test_format2"))
    assert cell.as_float() == time_to_excel_time(
        datetime(2016, 1, 1, 21, tzinfo=timezone.utc), False
    )


def test_set_date_time_uses_date_time_format():
    cell = Cell()
    cell.set_date_time(datetime(2018, 6, 18, tzinfo=timezone.utc))
    assert cell.value == "43269"
    assert cell.num_fmt == "m/d/yy h:mm"


def test_merge():
    cell = Cell(value="test", orig_value="test")
    cell.merge(1, 0)
    assert (cell.h_merge, cell.v_merge) == (1, 0)
    assert cell.is_modified() is True


def test_rich_text_replaces_value():
    cell = Cell(value="x")
    runs = [RichTextRun(font=RichTextFont(bold=True), text="rich")]
    cell.set_rich_text(runs)
    assert cell.value == ""
    assert cell.rich_text == runs
    assert cell.rich_text is not runs
    cell.set_string("plain")
    assert cell.rich_text == []


def test_rich_text_change_is_modification():
    runs = [RichTextRun(text="a")]
    cell = Cell(rich_text=runs, orig_rich_text=runs)
    assert cell.is_modified() is False
    cell.rich_text.append(RichTextRun(text="b"))
    assert cell.is_modified() is True


def test_set_format_and_data_validation():
    cell = Cell()
    cell.set_format("0.00")
    assert cell.num_fmt == "0.00"
    validation = new_data_validation(0, 0, 0, 0, True)
    cell.set_data_validation(validation)
    assert cell.data_validation is validation


def test_updates_checked_by_store_row():
    cell = Cell()
    cell.row = _Row(_LockedStoreRow(allowed=None))
    with pytest.raises(RuntimeError):
        cell.set_string("x")
    cell.row = _Row(_LockedStoreRow(allowed=cell))
    cell.set_string("y")
    assert cell.value == "y"


def test_marshal_round_trip():
    cell = Cell(
        value="line one\nline two",
        formula="SUM(A1:A2)",
        num_fmt="0.00",
        date1904=True,
        hidden=True,
        h_merge=2,
        v_merge=3,
        cell_type=CellType.BOOL,
        hyperlink=Hyperlink(display_string="shown", link="https://example.com", tooltip=""),
        num=7,
    )
    data = cell.marshal_binary()
    assert data.endswith(b"\n")
    assert data.count(b"\n") == 1
    other = Cell()
    other.unmarshal_binary(data)
    assert other.value == "line one\nline two"
    assert other.formula == "SUM(A1:A2)"
    assert other.num_fmt == "0.00"
    assert other.date1904 is True
    assert other.hidden is True
    assert (other.h_merge, other.v_merge) == (2, 3)
    assert other.cell_type is CellType.BOOL
    assert other.hyperlink.display_string == "shown"
    assert other.hyperlink.link == "https://example.com"
    assert other.hyperlink.tooltip == ""
    assert other.num == 7


def test_marshal_empty_strings_keep_prefixes():
    data = Cell().marshal_binary()
    fields = data.split()
    assert fields[0] == b"Vg=="
    assert fields[3] == b"false"


def test_unmarshal_rejects_bad_data():
    with pytest.raises(ValueError):
        Cell().unmarshal_binary(b"too few fields\n")
    bad = Cell().marshal_binary().replace(b"Vg==", b"!!!!", 1)
    with pytest.raises(ValueError):
        Cell().unmarshal_binary(bad)


def test_row_not_found_error():
    err = RowNotFoundError('I don\'t "exist"', "No such file")
    assert str(err) == 'Row "I don\'t \\"exist\\"" not found. No such file'
    assert err.key == 'I don\'t "exist"'
    assert err.reason == "No such file"
    assert isinstance(err, LookupError)