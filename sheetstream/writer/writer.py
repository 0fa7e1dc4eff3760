"""
Streaming writer shared by every format.

The writer owns the lifecycle (created -> opened -> closed), the output sink,
the row counter and the flush cadence. Encoding is delegated to a
FormatBackend.
"""

import io
import logging
import os
from typing import BinaryIO, Iterable, Optional

from sheetstream.core.entities import Row
from sheetstream.core.exceptions import (
    InvalidArgumentError,
    WriterAlreadyOpenedError,
    WriterIOError,
    WriterNotOpenedError
)
from sheetstream.core.interfaces import Destination, FormatBackend, WriterState

logger: logging.Logger = logging.getLogger(__name__)


class Writer:
    """
    Streams rows to a file or binary stream through a format backend.

    Usage:
        writer = Writer(CSVBackend())
        writer.open("out.csv")
        writer.add_rows(rows)
        writer.close()
    """

    # Number of rows to write before flushing
    FLUSH_THRESHOLD = 500

    def __init__(self, backend: FormatBackend, flush_threshold: Optional[int] = None) -> None:
        """
        Initialize writer.

        Args:
            backend: Format backend owned by this writer.
            flush_threshold: Rows between forced flushes (default 500).
        """
        if not isinstance(backend, FormatBackend):
            raise InvalidArgumentError(
                f"backend must be a FormatBackend, got {type(backend).__name__}"
            )
        if flush_threshold is None:
            flush_threshold = self.FLUSH_THRESHOLD
        if isinstance(flush_threshold, bool) or not isinstance(flush_threshold, int) or flush_threshold < 1:
            raise InvalidArgumentError(
                f"flush_threshold must be a positive integer, got {flush_threshold!r}"
            )

        self._backend: FormatBackend = backend
        self._flush_threshold: int = flush_threshold
        self._state: WriterState = WriterState.CREATED
        self._sink: Optional[BinaryIO] = None
        self._owns_sink: bool = False
        self._destination_name: str = ""
        self._row_count: int = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def backend(self) -> FormatBackend:
        return self._backend

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def is_opened(self) -> bool:
        return self._state is WriterState.OPENED

    @property
    def row_count(self) -> int:
        """Rows written since the writer was opened."""
        return self._row_count

    @property
    def flush_threshold(self) -> int:
        return self._flush_threshold

    @property
    def content_type(self) -> str:
        return self._backend.content_type

    @property
    def file_extension(self) -> str:
        return self._backend.file_extension

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self, destination: Destination) -> None:
        """
        Acquire the sink and let the backend write its preamble.

        Args:
            destination: File path, or a binary stream opened for writing.
                Streams are flushed but not closed by the writer.

        Raises:
            WriterAlreadyOpenedError: If the writer is already opened.
            WriterIOError: If the sink cannot be created or written.
        """
        if self._state is WriterState.OPENED:
            raise WriterAlreadyOpenedError(
                f"Writer is already opened on {self._destination_name}"
            )

        sink, owns_sink, name = self._acquire_sink(destination)

        try:
            self._backend.open(sink)
        except BaseException:
            if owns_sink:
                self._release(sink, name)
            raise

        self._sink = sink
        self._owns_sink = owns_sink
        self._destination_name = name
        self._row_count = 0
        self._state = WriterState.OPENED
        logger.info(f"Opened {self._backend.file_extension} writer on: {name}")

    def add_row(self, row: Row) -> None:
        """
        Encode a single row.

        Raises:
            WriterNotOpenedError: If the writer is not opened.
            InvalidArgumentError: If row is not a Row.
            WriterIOError: If the sink rejects the write or flush.
        """
        if self._state is not WriterState.OPENED:
            raise WriterNotOpenedError(
                "The writer needs to be opened before adding row."
            )
        if not isinstance(row, Row):
            raise InvalidArgumentError(
                f"add_row expects a Row, got {type(row).__name__}"
            )

        self._backend.write_row(self._sink, row)

        self._row_count += 1
        if self._row_count % self._flush_threshold == 0:
            self._flush()

    def add_rows(self, rows: Iterable[Row]) -> None:
        """
        Encode rows in order. Stops at the first failure; rows written
        before it stay in the sink.
        """
        if self._state is not WriterState.OPENED:
            raise WriterNotOpenedError(
                "The writer needs to be opened before adding rows."
            )
        for row in rows:
            self.add_row(row)

    def close(self) -> None:
        """
        Finalize the output and release the sink.
        Safe to call any number of times, and before open. Never raises.
        """
        if self._state is not WriterState.OPENED:
            return

        sink = self._sink
        try:
            self._backend.close(sink)
        except Exception as e:
            logger.warning(f"Backend failed to finalize {self._destination_name}: {e}")

        written = self._row_count
        self._row_count = 0
        self._sink = None
        self._state = WriterState.CLOSED

        if self._owns_sink:
            self._release(sink, self._destination_name)
        else:
            try:
                sink.flush()
            except Exception as e:
                logger.warning(f"Failed to flush {self._destination_name}: {e}")

        logger.info(f"Closed writer on {self._destination_name} ({written} rows)")

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _acquire_sink(self, destination: Destination):
        """Open a path for binary writing, or accept a writable stream."""
        if isinstance(destination, (str, os.PathLike)):
            path = os.fspath(destination)
            try:
                sink = open(path, "wb")
            except OSError as e:
                raise WriterIOError(f"Unable to open {path} for writing: {e}") from e
            return sink, True, path

        if isinstance(destination, io.TextIOBase):
            raise InvalidArgumentError(
                "Destination stream must be binary, got a text stream"
            )

        if hasattr(destination, "write"):
            name = getattr(destination, "name", None) or repr(destination)
            return destination, False, str(name)

        raise InvalidArgumentError(
            f"Destination must be a path or a binary stream, got {type(destination).__name__}"
        )

    def _flush(self) -> None:
        try:
            self._sink.flush()
        except (OSError, ValueError) as e:
            raise WriterIOError(f"Unable to flush {self._destination_name}: {e}") from e
        logger.debug(f"Flushed {self._destination_name} after {self._row_count} rows")

    def _release(self, sink: BinaryIO, name: str) -> None:
        try:
            sink.close()
        except Exception as e:
            logger.warning(f"Failed to close {name}: {e}")
