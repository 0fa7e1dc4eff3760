"""
CSV backend implementation.
Following Open/Closed Principle - implements FormatBackend without modification.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, BinaryIO, List, Mapping

from sheetstream.core.entities import Cell, CellType, Row
from sheetstream.core.exceptions import InvalidArgumentError, WriterIOError
from sheetstream.core.interfaces import FormatBackend

logger = logging.getLogger(__name__)


BOM_UTF8 = b"\xef\xbb\xbf"
RECORD_TERMINATOR = "\n"


@dataclass(frozen=True)
class CSVOptions:
    """Immutable CSV configuration."""
    field_delimiter: str = ","
    field_enclosure: str = '"'
    should_add_bom: bool = True

    def __post_init__(self) -> None:
        for name in ("field_delimiter", "field_enclosure"):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise InvalidArgumentError(
                    f"{name} must be a single character, got {value!r}"
                )
            if value in "\r\n":
                raise InvalidArgumentError(f"{name} cannot be a line break")
        if self.field_delimiter == self.field_enclosure:
            raise InvalidArgumentError(
                "field_delimiter and field_enclosure must differ"
            )
        if not isinstance(self.should_add_bom, bool):
            raise InvalidArgumentError(
                f"should_add_bom must be a boolean, got {self.should_add_bom!r}"
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CSVOptions":
        """
        Build options from a configuration section, ignoring unknown keys.

        Args:
            mapping: e.g. {"field_delimiter": ";", "should_add_bom": False}.

        Returns:
            CSVOptions instance.
        """
        known = ("field_delimiter", "field_enclosure", "should_add_bom")
        return cls(**{key: mapping[key] for key in known if key in mapping})


def cell_to_text(cell: Cell) -> str:
    """Get the textual representation of a cell."""
    if cell.type is CellType.EMPTY:
        return ""
    if cell.type is CellType.BOOLEAN:
        return "1" if cell.value else ""
    if cell.type is CellType.NUMERIC:
        value = cell.value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, Decimal):
            return format(value, "f")
        return str(value)
    return str(cell.value)


class CSVBackend(FormatBackend):
    """
    Encodes rows as delimiter separated text.
    Open/Closed: Implements FormatBackend, closed for modification.

    Fields containing the delimiter, the enclosure or a line break are
    enclosed, and embedded enclosures are doubled. There is no escape
    character.
    """

    def __init__(
        self,
        options: CSVOptions = None,
        content_type: str = "text/csv; charset=UTF-8",
        file_extension: str = ".csv"
    ):
        """
        Initialize CSV backend.

        Args:
            options: CSV options (defaults when omitted).
            content_type: MIME type reported for the produced file.
            file_extension: Extension of the produced file.
        """
        super().__init__(content_type, file_extension)
        self._options = options if options is not None else CSVOptions()
        self._last_written_row_index = 0

    @property
    def options(self) -> CSVOptions:
        return self._options

    @property
    def written_rows(self) -> int:
        """Number of records written since open."""
        return self._last_written_row_index

    def open(self, sink: BinaryIO) -> None:
        if self._options.should_add_bom:
            # UTF-8 BOM for spreadsheet applications
            self._write(sink, BOM_UTF8)
            logger.debug("Wrote UTF-8 BOM")

    def encode_field(self, text: str) -> str:
        """Enclose a field when it holds a delimiter, enclosure or line break."""
        delimiter = self._options.field_delimiter
        enclosure = self._options.field_enclosure
        if any(char in text for char in (delimiter, enclosure, "\n", "\r")):
            doubled = text.replace(enclosure, enclosure * 2)
            return f"{enclosure}{doubled}{enclosure}"
        return text

    def encode_row(self, row: Row) -> bytes:
        """Encode a row as one UTF-8 record, terminator included."""
        fields: List[str] = [self.encode_field(cell_to_text(cell)) for cell in row]
        line = self._options.field_delimiter.join(fields) + RECORD_TERMINATOR
        return line.encode("utf-8")

    def write_row(self, sink: BinaryIO, row: Row) -> None:
        # Encode fully first so a failure never leaves half a record
        self._write(sink, self.encode_row(row))
        self._last_written_row_index += 1

    def close(self, sink: BinaryIO) -> None:
        self._last_written_row_index = 0

    @staticmethod
    def _write(sink: BinaryIO, data: bytes) -> None:
        # Raw streams may accept fewer bytes than offered; keep writing the rest
        view = memoryview(data)
        total = 0
        while total < len(data):
            try:
                written = sink.write(view[total:])
            except (OSError, ValueError, TypeError) as e:
                raise WriterIOError(f"Unable to write data: {e}") from e
            if not written:
                raise WriterIOError(
                    f"Unable to write data: {total} of {len(data)} bytes written"
                )
            total += written


class TSVBackend(CSVBackend):
    """
    Encodes rows as tab separated text.
    Liskov Substitution: Can be used anywhere CSVBackend is expected.
    """

    def __init__(self, options: CSVOptions = None):
        options = options if options is not None else CSVOptions()
        super().__init__(
            options=CSVOptions(
                field_delimiter="\t",
                field_enclosure=options.field_enclosure,
                should_add_bom=options.should_add_bom
            ),
            content_type="text/tab-separated-values; charset=UTF-8",
            file_extension=".tsv"
        )

