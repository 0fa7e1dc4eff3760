"""
sheetstream - streaming spreadsheet writers.

Rows of typed cells are encoded by pluggable format backends behind one
writer lifecycle (open, add rows, close).
"""

from sheetstream.core.entities import Cell, CellType, Row, Style
from sheetstream.core.exceptions import (
    InvalidArgumentError,
    SheetStreamError,
    UnsupportedFormatError,
    WriterAlreadyOpenedError,
    WriterError,
    WriterIOError,
    WriterNotOpenedError
)
from sheetstream.core.interfaces import FormatBackend, WriterState
from sheetstream.writer import (
    CSVBackend,
    CSVOptions,
    TSVBackend,
    Writer,
    WriterFactory,
    WriterFormat,
    create_from_destination
)

__version__ = "1.0.0"

__all__ = [
    "Cell",
    "CellType",
    "Row",
    "Style",
    "FormatBackend",
    "WriterState",
    "Writer",
    "WriterFactory",
    "WriterFormat",
    "create_from_destination",
    "CSVBackend",
    "CSVOptions",
    "TSVBackend",
    "SheetStreamError",
    "UnsupportedFormatError",
    "WriterError",
    "WriterNotOpenedError",
    "WriterAlreadyOpenedError",
    "WriterIOError",
    "InvalidArgumentError",
]
