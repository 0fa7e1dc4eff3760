"""
Writer Factory - Creates a writer bound to the backend matching a destination.
Following Factory Pattern and Dependency Inversion Principle.
"""

from typing import Any, Callable, Dict, List, Optional
from enum import Enum
import logging
import os

from sheetstream.core.exceptions import UnsupportedFormatError
from sheetstream.core.interfaces import FormatBackend
from sheetstream.writer.csv_backend import CSVBackend, CSVOptions, TSVBackend
from sheetstream.writer.writer import Writer

logger = logging.getLogger(__name__)


BackendFactory = Callable[..., FormatBackend]


class WriterFormat(Enum):
    """Recognized output formats."""
    CSV = "csv"
    TSV = "tsv"
    XLSX = "xlsx"
    ODS = "ods"


def _csv_backend(**options: Any) -> FormatBackend:
    return CSVBackend(CSVOptions(**options))


def _tsv_backend(**options: Any) -> FormatBackend:
    return TSVBackend(CSVOptions(**options))


class WriterFactory:
    """
    Factory for creating writers.
    Dependency Inversion: Callers don't depend on concrete backends.

    Archive formats (XLSX, ODS) are recognized but ship without a backend;
    register one to enable them.
    """

    # Registry of backend factories
    _registry: Dict[WriterFormat, BackendFactory] = {
        WriterFormat.CSV: _csv_backend,
        WriterFormat.TSV: _tsv_backend,
    }

    @classmethod
    def create(
        cls,
        format: WriterFormat,
        flush_threshold: Optional[int] = None,
        **options: Any
    ) -> Writer:
        """
        Create an unopened writer for the specified format.

        Args:
            format: Output format to use.
            flush_threshold: Rows between forced flushes.
            **options: Backend options (e.g. field_delimiter for CSV).

        Returns:
            Writer instance.

        Raises:
            UnsupportedFormatError: If no backend is registered for format.
        """
        backend_factory = cls._registry.get(format)
        if backend_factory is None:
            raise UnsupportedFormatError(
                format.value,
                f"No writer backend registered for format: {format.value}"
            )

        return Writer(backend_factory(**options), flush_threshold=flush_threshold)

    @classmethod
    def create_from_string(cls, format_str: str, **kwargs: Any) -> Writer:
        """
        Create a writer from a format string.

        Args:
            format_str: Format string (e.g., "csv", "TSV").
            **kwargs: Forwarded to create().

        Returns:
            Writer instance.
        """
        extension = format_str.lower().lstrip(".")
        try:
            format = WriterFormat(extension)
        except ValueError:
            raise UnsupportedFormatError(extension) from None
        return cls.create(format, **kwargs)

    @classmethod
    def create_from_destination(cls, path: str, **kwargs: Any) -> Writer:
        """
        Create a writer based on the destination's file extension.
        Performs no I/O; the returned writer still has to be opened.

        Args:
            path: Destination path (extension is matched case-insensitively).
            **kwargs: Forwarded to create().

        Returns:
            Writer instance.

        Raises:
            UnsupportedFormatError: If the extension has no backend.
        """
        extension = os.path.splitext(os.fspath(path))[1].lower().lstrip(".")
        if not extension:
            raise UnsupportedFormatError(None)
        return cls.create_from_string(extension, **kwargs)

    @classmethod
    def register(cls, format: WriterFormat, backend_factory: BackendFactory) -> None:
        """
        Register a backend factory for a format.
        Open/Closed: Can add new backends without modifying existing code.

        Args:
            format: Output format.
            backend_factory: Callable returning a new FormatBackend per writer.
        """
        cls._registry[format] = backend_factory
        logger.info(f"Registered writer backend for format: {format.value}")

    @classmethod
    def unregister(cls, format: WriterFormat) -> None:
        """Remove the backend registered for a format, if any."""
        if cls._registry.pop(format, None) is not None:
            logger.info(f"Unregistered writer backend for format: {format.value}")

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        """Get list of format strings that currently have a backend."""
        return [f.value for f in cls._registry.keys()]


def create_from_destination(path: str, **kwargs: Any) -> Writer:
    """Create an unopened writer for path. See WriterFactory.create_from_destination."""
    return WriterFactory.create_from_destination(path, **kwargs)
