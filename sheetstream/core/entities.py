"""
Entity model shared by every writer backend.

- Cell: one scalar value tagged with its type
- Row: ordered cells plus an optional, opaque style reference
- Style: free-form style properties, only meaningful to styled formats
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from sheetstream.core.exceptions import InvalidArgumentError


CellValue = Union[str, int, float, Decimal, bool, None]


class CellType(Enum):
    """Supported cell types."""
    STRING = "string"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    EMPTY = "empty"
    ERROR = "error"


def _matches(cell_type: CellType, value: Any) -> bool:
    if cell_type is CellType.EMPTY:
        return value is None
    if cell_type is CellType.BOOLEAN:
        return isinstance(value, bool)
    if cell_type is CellType.NUMERIC:
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
    # STRING and ERROR both carry text
    return isinstance(value, str)


# ============================================================================
# Data Models (Value Objects)
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """Immutable cell: a value and the type tag describing it."""
    value: CellValue
    type: CellType

    def __post_init__(self) -> None:
        if not isinstance(self.type, CellType):
            raise InvalidArgumentError(f"Unknown cell type: {self.type!r}")
        if not _matches(self.type, self.value):
            raise InvalidArgumentError(
                f"Value {self.value!r} does not match cell type {self.type.value}"
            )

    @classmethod
    def from_value(cls, value: CellValue) -> "Cell":
        """
        Build a cell, inferring its type from the Python value.

        Args:
            value: None, str, bool, int, float or Decimal.

        Returns:
            Cell instance.

        Raises:
            InvalidArgumentError: If the value has no matching cell type.
        """
        if isinstance(value, Cell):
            return value
        if value is None or value == "":
            return cls(None, CellType.EMPTY)
        if isinstance(value, bool):
            return cls(value, CellType.BOOLEAN)
        if isinstance(value, (int, float, Decimal)):
            return cls(value, CellType.NUMERIC)
        if isinstance(value, str):
            return cls(value, CellType.STRING)
        raise InvalidArgumentError(
            f"Unsupported cell value type: {type(value).__name__}"
        )

    @classmethod
    def error(cls, code: str) -> "Cell":
        """Build an error cell (e.g. "#DIV/0!")."""
        return cls(code, CellType.ERROR)

    @property
    def is_empty(self) -> bool:
        return self.type is CellType.EMPTY


@dataclass(frozen=True)
class Style:
    """
    Opaque style reference.
    Text backends ignore it; styled formats interpret the properties.
    """
    name: Optional[str] = None
    properties: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def from_dict(cls, properties: Dict[str, Any], name: Optional[str] = None) -> "Style":
        return cls(name=name, properties=tuple(sorted(properties.items())))

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.properties)


@dataclass(frozen=True)
class Row:
    """Ordered sequence of cells. An empty row is still a record."""
    cells: Tuple[Cell, ...] = field(default_factory=tuple)
    style: Optional[Style] = None

    def __post_init__(self) -> None:
        # Accept any iterable of cells but store a tuple
        cells = tuple(self.cells)
        for cell in cells:
            if not isinstance(cell, Cell):
                raise InvalidArgumentError(
                    f"Row cells must be Cell instances, got {type(cell).__name__}"
                )
        object.__setattr__(self, "cells", cells)

    @classmethod
    def from_values(cls, values: Iterable[CellValue], style: Optional[Style] = None) -> "Row":
        """
        Build a row from raw values.

        Args:
            values: Cell values in column order.
            style: Optional style reference.

        Returns:
            Row instance.
        """
        return cls(tuple(Cell.from_value(v) for v in values), style)

    def to_values(self) -> List[CellValue]:
        """Get the raw cell values in column order."""
        return [cell.value for cell in self.cells]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)
