import io

import pytest

from xlsxcells.codec import (
    CellStoreFormatError,
    read_bool,
    read_end_of_record,
    read_float,
    read_group_separator,
    read_int,
    read_string,
    read_string_pointer,
    read_unit_separator,
    write_bool,
    write_end_of_record,
    write_float,
    write_group_separator,
    write_int,
    write_string,
    write_string_pointer,
    write_unit_separator,
)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def _reader(buf):
    return io.BytesIO(buf.getvalue())


def test_write_and_read_bool():
    buf = io.BytesIO()
    write_bool(buf, True)
    write_bool(buf, False)
    reader = _reader(buf)
    assert read_bool(reader) is True
    assert read_bool(reader) is False
    with pytest.raises(EOFError):
        read_bool(reader)


def test_bool_wire_format():
    buf = io.BytesIO()
    write_bool(buf, True)
    write_bool(buf, False)
    assert buf.getvalue() == b"\x01\x1f\x00\x1f"


def test_write_and_read_unit_separator():
    buf = io.BytesIO()
    write_unit_separator(buf)
    reader = _reader(buf)
    read_unit_separator(reader)
    assert reader.read() == b""
    with pytest.raises(EOFError):
        read_unit_separator(reader)


def test_unit_separator_mismatch_raises():
    with pytest.raises(CellStoreFormatError):
        read_unit_separator(io.BytesIO(b"\x1e"))


def test_write_and_read_group_separator():
    buf = io.BytesIO()
    write_group_separator(buf)
    assert buf.getvalue() == b"\x1d"
    reader = _reader(buf)
    read_group_separator(reader)
    with pytest.raises(EOFError):
        read_group_separator(reader)
    with pytest.raises(CellStoreFormatError):
        read_group_separator(io.BytesIO(b"\x1f"))


def test_write_and_read_string():
    buf = io.BytesIO()
    write_string(buf, "simple")
    write_string(buf, "multi\nline!")
    write_string(buf, "")
    write_string(buf, "Scheiß encoding")
    reader = _reader(buf)
    assert read_string(reader) == "simple"
    assert read_string(reader) == "multi\nline!"
    assert read_string(reader) == ""
    assert read_string(reader) == "Scheiß encoding"
    with pytest.raises(EOFError):
        read_string(reader)


def test_write_and_read_int():
    buf = io.BytesIO()
    write_int(buf, INT64_MIN)
    write_int(buf, 0)
    write_int(buf, INT64_MAX)
    reader = _reader(buf)
    assert read_int(reader) == INT64_MIN
    assert read_int(reader) == 0
    assert read_int(reader) == INT64_MAX
    with pytest.raises(EOFError):
        read_int(reader)


def test_int_wire_format_is_zigzag():
    buf = io.BytesIO()
    write_int(buf, 0)
    write_int(buf, -1)
    write_int(buf, 1)
    assert buf.getvalue() == b"\x00\x1f\x01\x1f\x02\x1f"


@pytest.mark.parametrize("value", [-300, -1, 1, 49, 50, 127, 128, 16384])
def test_int_round_trip(value):
    buf = io.BytesIO()
    write_int(buf, value)
    assert read_int(_reader(buf)) == value


def test_int_out_of_range_is_rejected():
    with pytest.raises(OverflowError):
        write_int(io.BytesIO(), INT64_MAX + 1)


@pytest.mark.parametrize("value", [0.0, 1.0, 12.5, -0.3, 40.4, 1e300])
def test_float_round_trip(value):
    buf = io.BytesIO()
    write_float(buf, value)
    reader = _reader(buf)
    assert read_float(reader) == value
    with pytest.raises(EOFError):
        read_float(reader)


def test_write_and_read_string_pointer():
    buf = io.BytesIO()
    write_string_pointer(buf, None)
    write_string_pointer(buf, "foo")
    write_string_pointer(buf, "bar")
    reader = _reader(buf)
    assert read_string_pointer(reader) is None
    assert read_string_pointer(reader) == "foo"
    assert read_string_pointer(reader) == "bar"
    with pytest.raises(EOFError):
        read_string_pointer(reader)


def test_empty_string_pointer_differs_from_none():
    buf = io.BytesIO()
    write_string_pointer(buf, "")
    write_string_pointer(buf, None)
    reader = _reader(buf)
    assert read_string_pointer(reader) == ""
    assert read_string_pointer(reader) is None


def test_write_and_read_end_of_record():
    buf = io.BytesIO()
    write_end_of_record(buf)
    assert buf.getvalue() == b"\x1e"
    reader = _reader(buf)
    read_end_of_record(reader)
    with pytest.raises(EOFError):
        read_end_of_record(reader)


def test_end_of_record_mismatch_raises():
    with pytest.raises(CellStoreFormatError):
        read_end_of_record(io.BytesIO(b"\x1f"))


def test_truncated_varint_raises():
    with pytest.raises(EOFError):
        read_int(io.BytesIO(b"\x80\x80"))


def test_overlong_varint_raises():
    with pytest.raises(CellStoreFormatError):
        read_int(io.BytesIO(b"\xff" * 11))


def test_mixed_fields_read_back_in_order():
    buf = io.BytesIO()
    write_string(buf, "value")
    write_bool(buf, True)
    write_int(buf, 49)
    write_float(buf, 20.2)
    write_end_of_record(buf)
    reader = _reader(buf)
    assert read_string(reader) == "value"
    assert read_bool(reader) is True
    assert read_int(reader) == 49
    assert read_float(reader) == 20.2
    read_end_of_record(reader)
    assert reader.read() == b""