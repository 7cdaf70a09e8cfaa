# xlsxcells

Building blocks for working with spreadsheet data in the XLSX model. The
package has no runtime dependencies.

- `xlsxcells.cell`: the `Cell` class. It holds a typed value (string, number,
  boolean, formula, date), a number format, a hyperlink, merge spans, a style
  and a data validation rule. It also records whether it has been modified
  since it was last persisted. The module also defines `RowNotFoundError`.
- `xlsxcells.celltype`: the `CellType` enum, the `Hyperlink` and
  `DateTimeOptions` dataclasses, and `fallback_to`.
- `xlsxcells.dates`: converts between `datetime` values and Excel serial day
  numbers, in both the 1900 and 1904 date systems. Serial numbers up to 61
  are treated the way Excel treats dates before March 1900.
- `xlsxcells.columns`: column definitions (`Col`) and `ColStore`. A
  `ColStore` keeps column ranges ordered and non-overlapping. When a new
  range is added, existing ranges are trimmed, split or replaced to make room.
- `xlsxcells.validation`: `DataValidation` rules. They cover drop-down lists,
  references to a list in another sheet, numeric and text-length ranges,
  input prompts and error messages.
- `xlsxcells.styles`: dataclasses for borders, fills, fonts, alignment and
  styles, and for rich-text colours, fonts and runs.
- `xlsxcells.codec`, `xlsxcells.stylecodec`, `xlsxcells.richtextcodec` and
  `xlsxcells.cellcodec`: a compact binary record format that uses separator
  bytes. It stores cells, styles, data validations and rich text.

## Installation

```
pip install xlsxcells
```

## Examples

Converting dates (naive datetimes are taken as UTC):

```python
from datetime import datetime, timezone
from xlsxcells.dates import time_to_excel_time, time_from_excel_time

time_to_excel_time(datetime(2018, 6, 18, tzinfo=timezone.utc), False)
# 43269.0
time_from_excel_time(41275.0, False)
# datetime(2013, 1, 1, 0, 0, tzinfo=timezone.utc)
```

Working with a cell:

```python
from xlsxcells.cell import Cell

cell = Cell()
cell.set_float_with_format(37947.75334343, "yyyy/mm/dd")
cell.value           # "37947.75334343"
cell.as_float()      # 37947.75334343
cell.is_modified()   # True

cell.set_bool(True)
cell.as_bool()       # True

cell.set_value(0.000001)
cell.value           # "0.000001" (numbers are never stored in exponent form)
```

About the value accessors:

- `as_float`, `as_int` and `as_int64` raise `ValueError` when the value is not
  a number.
- `get_time(date1904)` reads the value as an Excel serial date.
- `set_date_with_options` stores a datetime as wall-clock time in the zone
  given by a `DateTimeOptions`.

`Cell.marshal_binary()` encodes the cell's scalar fields as one line of text,
and `unmarshal_binary()` reads that line back.

Column ranges:

```python
from xlsxcells.columns import ColStore, new_col_for_range

store = ColStore()
store.add(new_col_for_range(1, 8))
store.add(new_col_for_range(4, 5))   # leaves 1-3, 4-5 and 6-8
[(c.min, c.max) for c in store]      # [(1, 3), (4, 5), (6, 8)]
store.find_col_by_index(7)           # the 6-8 column
```

Data validation:

```python
from xlsxcells.validation import (
    DataValidationOperator, DataValidationType, new_data_validation,
)

dv = new_data_validation(0, 0, 0, 0, True)
dv.set_drop_list(["a1", "a2", "a3"])   # ValueError if longer than 255 characters
dv.set_in_file_list("Sheet ' 2", 2, 1, 3, 10)
dv.formula1   # "'Sheet '' 2'!$C$2:$D$11"

dv.set_range(15, 4, DataValidationType.TEXT_LENGTH, DataValidationOperator.BETWEEN)
dv.formula1, dv.formula2   # ("4", "15")
```

Persisting a cell in the binary record format:

```python
import io
from xlsxcells.cell import Cell
from xlsxcells.cellcodec import write_cell, read_cell

buf = io.BytesIO()
cell = Cell()
cell.set_string("hello")
write_cell(buf, cell)
buf.seek(0)
restored = read_cell(buf)
restored.value   # "hello"
```

A missing separator or an oversized varint raises
`xlsxcells.codec.CellStoreFormatError`, a subclass of `ValueError`. Data that
ends too early raises `EOFError`.

## What the package does not do

- It does not open, read or write `.xlsx` files.
- It has no workbook, sheet or row objects.
- It has no cell store that keeps rows on disk. It provides only the record
  codec that such a store would use.
- It does not render values through number formats. A cell keeps its
  `num_fmt` string but never applies it to produce display text.

## Running the tests

```
pip install -e ".[test]"
pytest
```