"""
Custom exceptions for sheetstream.
Following Single Responsibility Principle - dedicated exception handling.
"""

from typing import Optional


class SheetStreamError(Exception):
    """Base exception for all sheetstream errors."""
    pass


class UnsupportedFormatError(SheetStreamError):
    """Raised when a destination extension has no registered backend."""

    def __init__(self, extension: Optional[str], message: Optional[str] = None) -> None:
        self.extension = extension
        if message is None:
            shown = f".{extension}" if extension else "(no extension)"
            message = f"No writer backend for file type: {shown}"
        super().__init__(message)


class WriterError(SheetStreamError):
    """Raised when a writer cannot complete an operation."""
    pass


class WriterNotOpenedError(WriterError):
    """Raised when rows are added to a writer that is not opened."""
    pass


class WriterAlreadyOpenedError(WriterError):
    """Raised when opening a writer that is already opened."""
    pass


class WriterIOError(WriterError, IOError):
    """Raised when the output sink cannot be created, written or flushed."""
    pass


class InvalidArgumentError(SheetStreamError, ValueError):
    """Raised when a cell, row or option is malformed."""
    pass


class ConfigurationError(SheetStreamError):
    """Raised when configuration is invalid."""
    pass
