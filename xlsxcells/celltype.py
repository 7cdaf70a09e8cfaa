"""Cell type metadata, hyperlinks and date export options."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from enum import IntEnum

GENERAL_FORMAT = "general"
INT_FORMAT = "0"
STRING_FORMAT = "@"
DEFAULT_DATE_FORMAT = "mm-dd-yy"
DEFAULT_DATE_TIME_FORMAT = "m/d/yy h:mm"


class CellType(IntEnum):
    """The storage type of a cell, as in the ST_CellType specification."""

    STRING = 0
    # A formula whose result is a string; numeric and boolean formulas
    # are stored with those types.
    STRING_FORMULA = 1
    NUMERIC = 2
    BOOL = 3
    # Saved as a shared string, as Excel does.
    INLINE = 4
    ERROR = 5
    # ISO 8601 date; values are output as stored.
    DATE = 6


@dataclass
class Hyperlink:
    """Link information for a cell.

    External links live in ``link``; links to cells or defined names
    inside the workbook are also recorded in ``location``.
    """

    display_string: str = ""
    link: str = ""
    tooltip: str = ""
    location: str = ""


@dataclass
class DateTimeOptions:
    """Options used when storing datetimes in cells."""

    location: tzinfo = field(default=timezone.utc)
    excel_time_format: str = DEFAULT_DATE_FORMAT


DEFAULT_DATE_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_FORMAT)
DEFAULT_DATE_TIME_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_TIME_FORMAT)

_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_SPECIAL = re.compile(r"[+-]?(inf|infinity|nan)", re.IGNORECASE)
_HEX = re.compile(r"[+-]?0[xX]([0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+")


def _is_number(text: str) -> bool:
    """Whether ``text`` is a complete floating point literal."""
    if _DECIMAL.fullmatch(text):
        return math.isfinite(float(text)) or not re.search(r"[eE]", text) or True
    if _SPECIAL.fullmatch(text):
        return True
    if _HEX.fullmatch(text):
        return True
    return False


def fallback_to(
    cell_type: CellType | None, cell_data: str, fallback: CellType
) -> CellType:
    """Keep ``cell_type`` if ``cell_data`` suits it, else return ``fallback``.

    Only a numeric type can be kept, and only when the data parses as a number.
    """
    if cell_type is CellType.NUMERIC and _is_number(cell_data):
        return cell_type
    return fallback