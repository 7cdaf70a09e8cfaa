"""Primitive encoders and decoders for the on-disk cell store format.

Values are separated by control characters: every field ends with a
unit separator, records end with a record separator and rows with a
group separator.  Integers are zig-zag varints and floats are their
IEEE 754 bit patterns written as unsigned varints.
"""

from __future__ import annotations

import struct
from typing import BinaryIO, Optional

TRUE = 0x01
FALSE = 0x00
US = 0x1F  # unit separator
RS = 0x1E  # record separator
GS = 0x1D  # group separator

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_MAX_VARINT_LEN = 10


class CellStoreFormatError(ValueError):
    """Raised when stored data does not follow the cell store format."""


def _read_byte(reader: BinaryIO) -> int:
    data = reader.read(1)
    if not data:
        raise EOFError("unexpected end of cell store data")
    return data[0]


def _write_uvarint(buf: BinaryIO, value: int) -> None:
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    buf.write(bytes(out))


def _read_uvarint(reader: BinaryIO) -> int:
    result = 0
    shift = 0
    for i in range(_MAX_VARINT_LEN):
        b = _read_byte(reader)
        if b < 0x80:
            if i == _MAX_VARINT_LEN - 1 and b > 1:
                raise CellStoreFormatError("varint overflows a 64-bit integer")
            return result | (b << shift)
        result |= (b & 0x7F) << shift
        shift += 7
    raise CellStoreFormatError("varint overflows a 64-bit integer")


def write_unit_separator(buf: BinaryIO) -> None:
    """Write a unit separator."""
    buf.write(bytes((US,)))


def read_unit_separator(reader: BinaryIO) -> None:
    """Consume a unit separator, raising if something else is found."""
    if _read_byte(reader) != US:
        raise CellStoreFormatError(
            "Invalid format in cellstore, no unit separator found"
        )


def write_group_separator(buf: BinaryIO) -> None:
    """Write a group separator."""
    buf.write(bytes((GS,)))


def read_group_separator(reader: BinaryIO) -> None:
    """Consume a group separator, raising if something else is found."""
    if _read_byte(reader) != GS:
        raise CellStoreFormatError(
            "Invalid format in cellstore, no group separator found"
        )


def write_end_of_record(buf: BinaryIO) -> None:
    """Write a record separator."""
    buf.write(bytes((RS,)))


def read_end_of_record(reader: BinaryIO) -> None:
    """Consume a record separator, raising if something else is found."""
    if _read_byte(reader) != RS:
        raise CellStoreFormatError("Expected end of record, but not found")


def write_bool(buf: BinaryIO, value: bool) -> None:
    """Write a boolean field."""
    buf.write(bytes((TRUE if value else FALSE,)))
    write_unit_separator(buf)


def read_bool(reader: BinaryIO) -> bool:
    """Read a boolean field."""
    b = _read_byte(reader)
    read_unit_separator(reader)
    return b == TRUE


def write_string(buf: BinaryIO, value: str) -> None:
    """Write a string field."""
    buf.write(value.encode("utf-8"))
    write_unit_separator(buf)


def read_string(reader: BinaryIO) -> str:
    """Read a string field up to its unit separator."""
    out = bytearray()
    while True:
        b = _read_byte(reader)
        if b == US:
            return out.decode("utf-8")
        out.append(b)


def write_int(buf: BinaryIO, value: int) -> None:
    """Write a signed 64-bit integer field as a zig-zag varint."""
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise OverflowError(f"{value} does not fit in 64 bits")
    _write_uvarint(buf, ((value << 1) ^ (value >> 63)) & 0xFFFFFFFFFFFFFFFF)
    write_unit_separator(buf)


def read_int(reader: BinaryIO) -> int:
    """Read a signed integer field."""
    raw = _read_uvarint(reader)
    read_unit_separator(reader)
    return (raw >> 1) ^ -(raw & 1)


def write_float(buf: BinaryIO, value: float) -> None:
    """Write a float field as the varint of its IEEE 754 bits."""
    (bits,) = struct.unpack("<Q", struct.pack("<d", value))
    _write_uvarint(buf, bits)
    write_unit_separator(buf)


def read_float(reader: BinaryIO) -> float:
    """Read a float field."""
    bits = _read_uvarint(reader)
    read_unit_separator(reader)
    (value,) = struct.unpack("<d", struct.pack("<Q", bits))
    return value


def write_string_pointer(buf: BinaryIO, value: Optional[str]) -> None:
    """Write an optional string: a nil flag, then the text if present."""
    write_bool(buf, value is None)
    if value is not None:
        buf.write(value.encode("utf-8"))
    write_unit_separator(buf)


def read_string_pointer(reader: BinaryIO) -> Optional[str]:
    """Read an optional string written by write_string_pointer."""
    if read_bool(reader):
        read_unit_separator(reader)
        return None
    return read_string(reader)