"""Style and rich text value types attached to cells."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional


@dataclass
class Border:
    """Border line styles and colours for the four sides of a cell."""

    left: str = ""
    left_color: str = ""
    right: str = ""
    right_color: str = ""
    top: str = ""
    top_color: str = ""
    bottom: str = ""
    bottom_color: str = ""


@dataclass
class Fill:
    """Pattern fill of a cell."""

    pattern_type: str = ""
    bg_color: str = ""
    fg_color: str = ""


@dataclass
class Font:
    """Font used to render a cell's value."""

    size: float = 0.0
    name: str = ""
    family: int = 0
    charset: int = 0
    color: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass
class Alignment:
    """Placement of a cell's value within the cell."""

    horizontal: str = ""
    indent: int = 0
    shrink_to_fit: bool = False
    text_rotation: int = 0
    vertical: str = ""
    wrap_text: bool = False


@dataclass
class Style:
    """The full visual style of a cell."""

    border: Border = field(default_factory=Border)
    fill: Fill = field(default_factory=Fill)
    font: Font = field(default_factory=Font)
    alignment: Alignment = field(default_factory=Alignment)
    apply_border: bool = False
    apply_fill: bool = False
    apply_font: bool = False
    apply_alignment: bool = False


class RichTextFontFamily(IntEnum):
    """Font family classes of the spreadsheet format."""

    UNSPECIFIED = 0
    ROMAN = 1
    SWISS = 2
    MODERN = 3
    SCRIPT = 4
    DECORATIVE = 5


class RichTextCharset(IntEnum):
    """Character sets a rich text font may declare."""

    UNSPECIFIED = -1
    ANSI = 0
    DEFAULT = 1
    SYMBOL = 2
    MAC = 77
    SHIFT_JIS = 128
    HANGEUL = 129
    JOHAB = 130
    GB2312 = 134
    BIG5 = 136
    GREEK = 161
    TURKISH = 162
    VIETNAMESE = 163
    HEBREW = 177
    ARABIC = 178
    BALTIC = 186
    RUSSIAN = 204
    THAI = 222
    EAST_EUROPE = 238
    OEM = 255


class RichTextVertAlign(str, Enum):
    """Vertical alignment of a rich text run relative to the baseline."""

    UNSPECIFIED = ""
    BASELINE = "baseline"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"


class RichTextUnderline(str, Enum):
    """Underline style of a rich text run."""

    UNSPECIFIED = ""
    SINGLE = "single"
    DOUBLE = "double"


@dataclass
class RichTextColor:
    """Colour of a rich text run, as ARGB, theme index or palette index."""

    rgb: str = ""
    tint: float = 0.0
    theme: Optional[int] = None
    indexed: Optional[int] = None


@dataclass
class RichTextFont:
    """Font settings for a single rich text run."""

    name: str = ""
    size: float = 0.0
    family: RichTextFontFamily = RichTextFontFamily.UNSPECIFIED
    charset: RichTextCharset = RichTextCharset.ANSI
    color: Optional[RichTextColor] = None
    bold: bool = False
    italic: bool = False
    strike: bool = False
    vert_align: RichTextVertAlign = RichTextVertAlign.UNSPECIFIED
    underline: RichTextUnderline = RichTextUnderline.UNSPECIFIED


@dataclass
class RichTextRun:
    """A piece of text with an optional font of its own."""

    font: Optional[RichTextFont] = None
    text: str = ""


RichText = List[RichTextRun]