"""Encoders and decoders for cell styles and data validations in the cell store."""

from __future__ import annotations

from typing import BinaryIO

from xlsxcells.codec import (
    read_bool,
    read_end_of_record,
    read_float,
    read_int,
    read_string,
    read_string_pointer,
    write_bool,
    write_end_of_record,
    write_float,
    write_int,
    write_string,
    write_string_pointer,
)
from xlsxcells.styles import Alignment, Border, Fill, Font, Style
from xlsxcells.validation import DataValidation


def write_border(buf: BinaryIO, border: Border) -> None:
    """Write the eight fields of a border."""
    for text in (
        border.left,
        border.left_color,
        border.right,
        border.right_color,
        border.top,
        border.top_color,
        border.bottom,
        border.bottom_color,
    ):
        write_string(buf, text)


def read_border(reader: BinaryIO) -> Border:
    """Read a border written by write_border."""
    return Border(
        left=read_string(reader),
        left_color=read_string(reader),
        right=read_string(reader),
        right_color=read_string(reader),
        top=read_string(reader),
        top_color=read_string(reader),
        bottom=read_string(reader),
        bottom_color=read_string(reader),
    )


def write_fill(buf: BinaryIO, fill: Fill) -> None:
    """Write a pattern fill."""
    write_string(buf, fill.pattern_type)
    write_string(buf, fill.bg_color)
    write_string(buf, fill.fg_color)


def read_fill(reader: BinaryIO) -> Fill:
    """Read a fill written by write_fill."""
    return Fill(
        pattern_type=read_string(reader),
        bg_color=read_string(reader),
        fg_color=read_string(reader),
    )


def write_font(buf: BinaryIO, font: Font) -> None:
    """Write a cell font."""
    write_float(buf, font.size)
    write_string(buf, font.name)
    write_int(buf, font.family)
    write_int(buf, font.charset)
    write_string(buf, font.color)
    write_bool(buf, font.bold)
    write_bool(buf, font.italic)
    write_bool(buf, font.underline)


def read_font(reader: BinaryIO) -> Font:
    """Read a font written by write_font."""
    return Font(
        size=read_float(reader),
        name=read_string(reader),
        family=read_int(reader),
        charset=read_int(reader),
        color=read_string(reader),
        bold=read_bool(reader),
        italic=read_bool(reader),
        underline=read_bool(reader),
    )


def write_alignment(buf: BinaryIO, alignment: Alignment) -> None:
    """Write a cell alignment."""
    write_string(buf, alignment.horizontal)
    write_int(buf, alignment.indent)
    write_bool(buf, alignment.shrink_to_fit)
    write_int(buf, alignment.text_rotation)
    write_string(buf, alignment.vertical)
    write_bool(buf, alignment.wrap_text)


def read_alignment(reader: BinaryIO) -> Alignment:
    """Read an alignment written by write_alignment."""
    return Alignment(
        horizontal=read_string(reader),
        indent=read_int(reader),
        shrink_to_fit=read_bool(reader),
        text_rotation=read_int(reader),
        vertical=read_string(reader),
        wrap_text=read_bool(reader),
    )


def write_style(buf: BinaryIO, style: Style) -> None:
    """Write a complete style as one record."""
    write_border(buf, style.border)
    write_fill(buf, style.fill)
    write_font(buf, style.font)
    write_alignment(buf, style.alignment)
    write_bool(buf, style.apply_border)
    write_bool(buf, style.apply_fill)
    write_bool(buf, style.apply_font)
    write_bool(buf, style.apply_alignment)
    write_end_of_record(buf)


def read_style(reader: BinaryIO) -> Style:
    """Read a style written by write_style."""
    style = Style(
        border=read_border(reader),
        fill=read_fill(reader),
        font=read_font(reader),
        alignment=read_alignment(reader),
        apply_border=read_bool(reader),
        apply_fill=read_bool(reader),
        apply_font=read_bool(reader),
        apply_alignment=read_bool(reader),
    )
    read_end_of_record(reader)
    return style


def write_data_validation(buf: BinaryIO, validation: DataValidation) -> None:
    """Write a data validation rule as one record."""
    write_bool(buf, validation.allow_blank)
    write_bool(buf, validation.show_input_message)
    write_bool(buf, validation.show_error_message)
    write_string_pointer(buf, validation.error_style)
    write_string_pointer(buf, validation.error_title)
    write_string(buf, validation.operator)
    write_string_pointer(buf, validation.error)
    write_string_pointer(buf, validation.prompt_title)
    write_string_pointer(buf, validation.prompt)
    write_string(buf, validation.type)
    write_string(buf, validation.sqref)
    write_string(buf, validation.formula1)
    write_string(buf, validation.formula2)
    write_end_of_record(buf)


def read_data_validation(reader: BinaryIO) -> DataValidation:
    """Read a data validation written by write_data_validation."""
    validation = DataValidation(
        allow_blank=read_bool(reader),
        show_input_message=read_bool(reader),
        show_error_message=read_bool(reader),
        error_style=read_string_pointer(reader),
        error_title=read_string_pointer(reader),
        operator=read_string(reader),
        error=read_string_pointer(reader),
        prompt_title=read_string_pointer(reader),
        prompt=read_string_pointer(reader),
        type=read_string(reader),
        sqref=read_string(reader),
        formula1=read_string(reader),
        formula2=read_string(reader),
    )
    read_end_of_record(reader)
    return validation