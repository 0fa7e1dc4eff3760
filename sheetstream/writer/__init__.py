"""
Writer module for sheetstream.
Contains the writer lifecycle, the CSV backend and the writer factory.
"""

from sheetstream.writer.csv_backend import CSVBackend, CSVOptions, TSVBackend
from sheetstream.writer.writer import Writer
from sheetstream.writer.writer_factory import WriterFactory, WriterFormat, create_from_destination

__all__ = [
    "CSVBackend",
    "CSVOptions",
    "TSVBackend",
    "Writer",
    "WriterFactory",
    "WriterFormat",
    "create_from_destination",
]
