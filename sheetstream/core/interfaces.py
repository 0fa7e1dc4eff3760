"""
Core interfaces following SOLID principles.

- DIP: The writer lifecycle depends on the backend abstraction, not on formats
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO, Union
import os

from sheetstream.core.entities import Row


Destination = Union[str, os.PathLike, BinaryIO]


class WriterState(Enum):
    """Lifecycle states of a writer."""
    CREATED = "created"
    OPENED = "opened"
    CLOSED = "closed"


# ============================================================================
# Abstract Base Classes
# ============================================================================

class FormatBackend(ABC):
    """
    Format-specific encoder driven by a writer.

    The writer owns the sink and passes it to every hook. A backend instance
    belongs to exactly one writer. Options are fixed at construction.
    """

    def __init__(self, content_type: str, file_extension: str) -> None:
        self._content_type = content_type
        self._file_extension = file_extension

    @property
    def content_type(self) -> str:
        """Get the MIME content type of the produced file."""
        return self._content_type

    @property
    def file_extension(self) -> str:
        """Get the file extension for this backend."""
        return self._file_extension

    @abstractmethod
    def open(self, sink: BinaryIO) -> None:
        """Write format preamble bytes. No row has been presented yet."""
        pass

    @abstractmethod
    def write_row(self, sink: BinaryIO, row: Row) -> None:
        """
        Encode one row as a single atomic unit.

        Raises:
            WriterIOError: If the sink rejects the write.
        """
        pass

    @abstractmethod
    def close(self, sink: BinaryIO) -> None:
        """Write format trailer bytes. Must be safe after zero rows."""
        pass
