"""Encoders and decoders for rich text runs in the cell store."""

from __future__ import annotations

from enum import Enum
from typing import Any, BinaryIO, Iterable, List, Optional, Type

from xlsxcells.codec import (
    read_bool,
    read_end_of_record,
    read_float,
    read_int,
    read_string,
    write_bool,
    write_end_of_record,
    write_float,
    write_int,
    write_string,
)
from xlsxcells.styles import (
    RichTextCharset,
    RichTextColor,
    RichTextFont,
    RichTextFontFamily,
    RichTextRun,
    RichTextUnderline,
    RichTextVertAlign,
)


def _enum_or_raw(enum_type: Type[Enum], raw: Any) -> Any:
    """Return the enum member for ``raw``, or ``raw`` itself if there is none."""
    try:
        return enum_type(raw)
    except ValueError:
        return raw


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def write_rich_text_color(buf: BinaryIO, color: RichTextColor) -> None:
    """Write a rich text colour, with optional theme and palette index records."""
    has_theme = color.theme is not None
    has_indexed = color.indexed is not None
    write_string(buf, color.rgb)
    write_bool(buf, has_theme)
    write_float(buf, color.tint)
    write_bool(buf, has_indexed)
    write_end_of_record(buf)
    if color.theme is not None:
        write_int(buf, color.theme)
        write_end_of_record(buf)
    if color.indexed is not None:
        write_int(buf, color.indexed)
        write_end_of_record(buf)


def read_rich_text_color(reader: BinaryIO) -> RichTextColor:
    """Read a colour written by write_rich_text_color."""
    rgb = read_string(reader)
    has_theme = read_bool(reader)
    tint = read_float(reader)
    has_indexed = read_bool(reader)
    read_end_of_record(reader)
    color = RichTextColor(rgb=rgb, tint=tint)
    if has_theme:
        color.theme = read_int(reader)
        read_end_of_record(reader)
    if has_indexed:
        color.indexed = read_int(reader)
        read_end_of_record(reader)
    return color


def write_rich_text_font(buf: BinaryIO, font: RichTextFont) -> None:
    """Write a rich text font, followed by its colour if it has one."""
    write_string(buf, font.name)
    write_float(buf, font.size)
    write_int(buf, int(font.family))
    write_int(buf, int(font.charset))
    write_bool(buf, font.color is not None)
    write_bool(buf, font.bold)
    write_bool(buf, font.italic)
    write_bool(buf, font.strike)
    write_string(buf, _text(font.vert_align))
    write_string(buf, _text(font.underline))
    write_end_of_record(buf)
    if font.color is not None:
        write_rich_text_color(buf, font.color)


def read_rich_text_font(reader: BinaryIO) -> RichTextFont:
    """Read a font written by write_rich_text_font."""
    name = read_string(reader)
    size = read_float(reader)
    family = _enum_or_raw(RichTextFontFamily, read_int(reader))
    charset = _enum_or_raw(RichTextCharset, read_int(reader))
    has_color = read_bool(reader)
    bold = read_bool(reader)
    italic = read_bool(reader)
    strike = read_bool(reader)
    vert_align = _enum_or_raw(RichTextVertAlign, read_string(reader))
    underline = _enum_or_raw(RichTextUnderline, read_string(reader))
    read_end_of_record(reader)
    color = read_rich_text_color(reader) if has_color else None
    return RichTextFont(
        name=name,
        size=size,
        family=family,
        charset=charset,
        color=color,
        bold=bold,
        italic=italic,
        strike=strike,
        vert_align=vert_align,
        underline=underline,
    )


def write_rich_text_run(buf: BinaryIO, run: RichTextRun) -> None:
    """Write a rich text run, followed by its font if it has one."""
    write_bool(buf, run.font is not None)
    write_string(buf, run.text)
    write_end_of_record(buf)
    if run.font is not None:
        write_rich_text_font(buf, run.font)


def read_rich_text_run(reader: BinaryIO) -> RichTextRun:
    """Read a run written by write_rich_text_run."""
    has_font = read_bool(reader)
    text = read_string(reader)
    read_end_of_record(reader)
    font: Optional[RichTextFont] = read_rich_text_font(reader) if has_font else None
    return RichTextRun(font=font, text=text)


def write_rich_text(buf: BinaryIO, runs: Optional[Iterable[RichTextRun]]) -> None:
    """Write a run count followed by each run; None counts as no runs."""
    run_list = list(runs or [])
    write_int(buf, len(run_list))
    for run in run_list:
        write_rich_text_run(buf, run)


def read_rich_text(reader: BinaryIO) -> List[RichTextRun]:
    """Read runs written by write_rich_text."""
    count = read_int(reader)
    return [read_rich_text_run(reader) for _ in range(count)]