"""Encoder and decoder for whole cells in the cell store format.

A cell is written as one record of scalar fields, followed by its rich
text runs, then by a style record and a data validation record when the
cell has them.  A missing cell is written as a single "nil" flag.
"""

from __future__ import annotations

from typing import BinaryIO, Optional, Union

from xlsxcells.cell import Cell
from xlsxcells.celltype import CellType, Hyperlink
from xlsxcells.codec import (
    read_bool,
    read_end_of_record,
    read_int,
    read_string,
    write_bool,
    write_end_of_record,
    write_int,
    write_string,
)
from xlsxcells.richtextcodec import read_rich_text, write_rich_text
from xlsxcells.stylecodec import (
    read_data_validation,
    read_style,
    write_data_validation,
    write_style,
)


def _cell_type(raw: int) -> Union[CellType, int]:
    try:
        return CellType(raw)
    except ValueError:
        return raw


def write_cell(buf: BinaryIO, cell: Optional[Cell]) -> None:
    """Write ``cell``, or a nil marker if it is None."""
    if cell is None:
        write_bool(buf, True)
        write_end_of_record(buf)
        return
    # The stored style is read directly so that an absent style stays absent.
    style = cell._style
    write_bool(buf, False)
    write_string(buf, cell.value)
    write_string(buf, cell.formula)
    write_bool(buf, style is not None)
    write_string(buf, cell.num_fmt)
    write_bool(buf, cell.date1904)
    write_bool(buf, cell.hidden)
    write_int(buf, cell.h_merge)
    write_int(buf, cell.v_merge)
    write_int(buf, int(cell.cell_type))
    write_bool(buf, cell.data_validation is not None)
    write_string(buf, cell.hyperlink.display_string)
    write_string(buf, cell.hyperlink.link)
    write_string(buf, cell.hyperlink.tooltip)
    write_int(buf, cell.num)
    write_rich_text(buf, cell.rich_text)
    write_end_of_record(buf)
    if style is not None:
        write_style(buf, style)
    if cell.data_validation is not None:
        write_data_validation(buf, cell.data_validation)


def read_cell(reader: BinaryIO) -> Optional[Cell]:
    """Read a cell written by write_cell; a nil marker gives None."""
    if read_bool(reader):
        read_end_of_record(reader)
        return None
    value = read_string(reader)
    formula = read_string(reader)
    has_style = read_bool(reader)
    num_fmt = read_string(reader)
    date1904 = read_bool(reader)
    hidden = read_bool(reader)
    h_merge = read_int(reader)
    v_merge = read_int(reader)
    cell_type = _cell_type(read_int(reader))
    has_validation = read_bool(reader)
    hyperlink = Hyperlink(
        display_string=read_string(reader),
        link=read_string(reader),
        tooltip=read_string(reader),
    )
    num = read_int(reader)
    rich_text = read_rich_text(reader)
    read_end_of_record(reader)
    style = read_style(reader) if has_style else None
    validation = read_data_validation(reader) if has_validation else None
    return Cell(
        num=num,
        value=value,
        num_fmt=num_fmt,
        cell_type=cell_type,
        formula=formula,
        style=style,
        rich_text=rich_text,
        date1904=date1904,
        hidden=hidden,
        h_merge=h_merge,
        v_merge=v_merge,
        data_validation=validation,
        hyperlink=hyperlink,
    )