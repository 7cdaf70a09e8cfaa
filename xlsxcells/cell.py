"""Spreadsheet cells: typed values, formats, styles and change tracking."""

from __future__ import annotations

import base64
import binascii
import math
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from xlsxcells.celltype import (
    DEFAULT_DATE_OPTIONS,
    DEFAULT_DATE_TIME_OPTIONS,
    GENERAL_FORMAT,
    CellType,
    DateTimeOptions,
    Hyperlink,
)
from xlsxcells.dates import UNIX_EPOCH, time_from_excel_time, time_to_excel_time
from xlsxcells.styles import RichTextRun, Style
from xlsxcells.validation import DataValidation

_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_SPECIAL = re.compile(r"[+-]?(inf|infinity|nan)", re.IGNORECASE)
_HEX = re.compile(
    r"[+-]?0[xX]([0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+"
)
_INTEGER = re.compile(r"[+-]?\d+")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_TRUE_WORDS = {"1", "t", "T", "true", "TRUE", "True"}
_FALSE_WORDS = {"0", "f", "F", "false", "FALSE", "False"}


def _parse_float(text: str) -> float:
    """Parse a complete floating point literal, raising ValueError otherwise."""
    if _DECIMAL.fullmatch(text):
        value = float(text)
        if math.isinf(value):
            raise ValueError(f"number out of range: {text!r}")
        return value
    if _SPECIAL.fullmatch(text):
        return float(text)
    if _HEX.fullmatch(text):
        value = float.fromhex(text)
        if math.isinf(value):
            raise ValueError(f"number out of range: {text!r}")
        return value
    raise ValueError(f"invalid number: {text!r}")


def _parse_int64(text: str) -> int:
    """Parse a base-10 signed 64-bit integer, raising ValueError otherwise."""
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _format_float(value: float) -> str:
    """Shortest exact decimal form of ``value``, never in exponent notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _unb64(text: str, prefix: str) -> str:
    try:
        decoded = base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError(f"invalid encoded field: {text!r}") from exc
    value = decoded.decode("utf-8")
    return value[len(prefix):] if value.startswith(prefix) else value


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


class RowNotFoundError(LookupError):
    """Raised by a cell store when no row is persisted under a key."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        quoted = '"' + key.replace("\\", "\\\\").replace('"', '\\"') + '"'
        super().__init__(f"Row {quoted} not found. {reason}")


class Cell:
    """The value, format and presentation of one cell in a row."""

    def __init__(
        self,
        *,
        row: Any = None,
        num: int = 0,
        value: str = "",
        num_fmt: str = "",
        cell_type: CellType = CellType.STRING,
        formula: str = "",
        style: Optional[Style] = None,
        rich_text: Optional[Iterable[RichTextRun]] = None,
        date1904: bool = False,
        hidden: bool = False,
        h_merge: int = 0,
        v_merge: int = 0,
        data_validation: Optional[DataValidation] = None,
        hyperlink: Optional[Hyperlink] = None,
        orig_value: str = "",
        orig_num_fmt: str = "",
        orig_rich_text: Optional[Iterable[RichTextRun]] = None,
    ) -> None:
        self.row = row
        self.num = num
        self.value = value
        self.num_fmt = num_fmt
        self.rich_text: List[RichTextRun] = list(rich_text or [])
        self.date1904 = date1904
        self.hidden = hidden
        self.h_merge = h_merge
        self.v_merge = v_merge
        self.data_validation = data_validation
        self.hyperlink = hyperlink if hyperlink is not None else Hyperlink()
        self.orig_value = orig_value
        self.orig_num_fmt = orig_num_fmt
        self.orig_rich_text: List[RichTextRun] = list(orig_rich_text or [])
        self._cell_type = cell_type
        self._formula = formula
        self._style = style
        self._modified = False

    def __repr__(self) -> str:
        return (
            f"Cell(num={self.num}, value={self.value!r}, "
            f"cell_type={self._cell_type!r}, num_fmt={self.num_fmt!r})"
        )

    @property
    def cell_type(self) -> CellType:
        """The storage type of the cell."""
        return self._cell_type

    @property
    def formula(self) -> str:
        """The cell's formula, or an empty string."""
        return self._formula

    def _updatable(self) -> None:
        store_row = getattr(self.row, "cell_store_row", None)
        if store_row is not None:
            store_row.cell_updatable(self)

    def is_modified(self) -> bool:
        """Whether the cell changed since it was last persisted."""
        return (
            self._modified
            or self.value != self.orig_value
            or self.num_fmt != self.orig_num_fmt
            or list(self.rich_text or []) != list(self.orig_rich_text or [])
        )

    def merge(self, hcells: int, vcells: int) -> None:
        """Merge with the given number of cells to the right and below."""
        self._updatable()
        self.h_merge = hcells
        self.v_merge = vcells
        self._modified = True

    def set_string(self, value: str) -> None:
        """Store a string value."""
        self._updatable()
        self.value = value
        self.rich_text = []
        self._formula = ""
        self._cell_type = CellType.STRING
        self._modified = True

    def set_rich_text(self, runs: Iterable[RichTextRun]) -> None:
        """Store rich text, replacing any plain value."""
        self._updatable()
        self.value = ""
        self.rich_text = list(runs)
        self._formula = ""
        self._cell_type = CellType.STRING
        self._modified = True

    def set_float(self, value: float) -> None:
        """Store a floating point number."""
        self._updatable()
        self.set_value(float(value))

    def get_time(self, date1904: bool) -> datetime:
        """Interpret the value as an Excel serial date.

        Raises ValueError if the value is not a number.
        """
        return time_from_excel_time(self.as_float(), date1904)

    def set_float_with_format(self, value: float, fmt: str) -> None:
        """Store a floating point number with a number format."""
        self._updatable()
        self.set_value(float(value))
        self.num_fmt = fmt
        self._formula = ""

    def set_format(self, fmt: str) -> None:
        """Set the number format."""
        self._updatable()
        self.num_fmt = fmt
        self._modified = True

    def set_date(self, t: datetime) -> None:
        """Store a date using the default date format."""
        self._updatable()
        self.set_date_with_options(t, DEFAULT_DATE_OPTIONS)

    def set_date_time(self, t: datetime) -> None:
        """Store a date and time using the default date-time format."""
        self._updatable()
        self.set_date_with_options(t, DEFAULT_DATE_TIME_OPTIONS)

    def set_date_with_options(self, t: datetime, options: DateTimeOptions) -> None:
        """Store ``t`` as wall-clock time in ``options.location``.

        Sub-second precision is dropped; naive datetimes are taken as UTC.
        """
        self._updatable()
        if t.tzinfo is None:
            t = t.replace(tzinfo=timezone.utc)
        offset = t.astimezone(options.location).utcoffset() or timedelta(0)
        delta = t - UNIX_EPOCH
        unix_seconds = delta.days * 86400 + delta.seconds
        shifted = UNIX_EPOCH + timedelta(
            seconds=unix_seconds + int(offset.total_seconds())
        )
        self.set_date_time_with_format(
            time_to_excel_time(shifted, self.date1904), options.excel_time_format
        )
        self._modified = True

    def set_date_time_with_format(self, value: float, fmt: str) -> None:
        """Store an Excel serial date number with a number format."""
        self._updatable()
        self.value = _format_float(value)
        self.num_fmt = fmt
        self._formula = ""
        self._cell_type = CellType.NUMERIC
        self._modified = True

    def as_float(self) -> float:
        """The value as a float; raises ValueError if it is not a number."""
        return _parse_float(self.value)

    def set_int64(self, value: int) -> None:
        """Store a 64-bit integer."""
        self._updatable()
        self.set_value(int(value))

    def as_int64(self) -> int:
        """The value as a base-10 64-bit integer; raises ValueError otherwise."""
        return _parse_int64(self.value)

    def set_int(self, value: int) -> None:
        """Store an integer."""
        self._updatable()
        self.set_value(int(value))

    def as_int(self) -> int:
        """The value parsed as a number and truncated toward zero."""
        return int(_parse_float(self.value))

    def set_value(self, value: Any) -> None:
        """Store a value, choosing the cell type from its Python type."""
        self._updatable()
        if isinstance(value, datetime):
            self.set_date_time(value)
        elif isinstance(value, bool):
            self.set_string("true" if value else "false")
        elif isinstance(value, int):
            self.set_numeric(str(value))
        elif isinstance(value, float):
            self.set_numeric(_format_float(value))
        elif isinstance(value, str):
            self.set_string(value)
        elif isinstance(value, (bytes, bytearray)):
            self.set_string(bytes(value).decode("utf-8"))
        elif value is None:
            self.set_string("")
        else:
            self.set_string(str(value))

    def set_numeric(self, value: str) -> None:
        """Store a number given as its text, with the general format."""
        self._updatable()
        self.value = value
        self.num_fmt = GENERAL_FORMAT
        self._formula = ""
        self._cell_type = CellType.NUMERIC
        self._modified = True

    def set_bool(self, value: bool) -> None:
        """Store a boolean."""
        self._updatable()
        self.value = "1" if value else "0"
        self._cell_type = CellType.BOOL
        self._modified = True

    def as_bool(self) -> bool:
        """The value as a boolean.

        Booleans are true for "1", numbers for anything but "0", and
        other types for any non-empty value.
        """
        if self._cell_type is CellType.BOOL:
            return self.value == "1"
        if self._cell_type is CellType.NUMERIC:
            return self.value != "0"
        return self.value != ""

    def set_formula(self, formula: str) -> None:
        """Set a formula with a numeric result."""
        self._updatable()
        self._formula = formula
        self._cell_type = CellType.NUMERIC
        self._modified = True

    def set_string_formula(self, formula: str) -> None:
        """Set a formula with a string result."""
        self._updatable()
        self._formula = formula
        self._cell_type = CellType.STRING_FORMULA
        self._modified = True

    def get_style(self) -> Style:
        """The cell's style, created empty on first use."""
        if self._style is None:
            self._style = Style()
        return self._style

    def set_style(self, style: Optional[Style]) -> None:
        """Replace the cell's style."""
        self._updatable()
        self._style = style
        self._modified = True

    def set_data_validation(self, validation: Optional[DataValidation]) -> None:
        """Attach a data validation rule to the cell."""
        self._updatable()
        self.data_validation = validation
        self._modified = True

    def marshal_binary(self) -> bytes:
        """Encode the cell's scalar fields as one line of text.

        Row, style and data validation are not included.
        """
        fields = [
            _b64("V" + self.value),
            _b64("F" + self._formula),
            _b64("N" + self.num_fmt),
            "true" if self.date1904 else "false",
            "true" if self.hidden else "false",
            str(self.h_merge),
            str(self.v_merge),
            str(int(self._cell_type)),
            _b64("HDS" + self.hyperlink.display_string),
            _b64("HL" + self.hyperlink.link),
            _b64("HTT" + self.hyperlink.tooltip),
            str(self.num),
        ]
        return (" ".join(fields) + "\n").encode("ascii")

    def unmarshal_binary(self, data: bytes) -> None:
        """Load fields encoded by marshal_binary; raises ValueError if malformed."""
        parts = data.decode("ascii").split()
        if len(parts) != 12:
            raise ValueError(f"expected 12 fields, found {len(parts)}")
        (value, formula, num_fmt, date1904, hidden, h_merge, v_merge,
         cell_type, hds, hl, htt, num) = parts
        self.date1904 = _parse_bool(date1904)
        self.hidden = _parse_bool(hidden)
        self.h_merge = int(h_merge)
        self.v_merge = int(v_merge)
        self._cell_type = CellType(int(cell_type))
        self.num = int(num)
        self.value = _unb64(value, "V")
        self._formula = _unb64(formula, "F")
        self.num_fmt = _unb64(num_fmt, "N")
        self.hyperlink.display_string = _unb64(hds, "HDS")
        self.hyperlink.link = _unb64(hl, "HL")
        self.hyperlink.tooltip = _unb64(htt, "HTT")