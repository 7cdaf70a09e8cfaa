"""Spreadsheet cells, columns, data validation, Excel dates and a binary cell-store record codec."""

__version__ = "0.1.0"

__all__ = [
    "cell",
    "cellcodec",
    "celltype",
    "codec",
    "columns",
    "dates",
    "richtextcodec",
    "stylecodec",
    "styles",
    "validation",
]