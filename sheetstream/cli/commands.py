"""
CLI command implementations.
Each command follows Single Responsibility Principle.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

from sheetstream.cli.base import BaseCommand
from sheetstream.core.entities import Row
from sheetstream.core.exceptions import InvalidArgumentError
from sheetstream.writer.writer_factory import WriterFactory

logger: logging.Logger = logging.getLogger(__name__)


def read_rows(input_path: str) -> Iterator[Row]:
    """
    Read rows from a JSON file.

    Accepts either a JSON array of arrays, or JSON Lines (one array per
    line, `.jsonl` extension). Blank JSON Lines are skipped.

    Raises:
        InvalidArgumentError: If a record is not an array of scalars.
    """
    path = Path(input_path)

    if path.suffix.lower() == ".jsonl":
        with open(path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, 1):
                if not line.strip():
                    continue
                yield _to_row(json.loads(line), f"line {line_number}")
        return

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise InvalidArgumentError(f"{input_path} must contain a JSON array of rows")
    for index, values in enumerate(data, 1):
        yield _to_row(values, f"row {index}")


def _to_row(values: Any, where: str) -> Row:
    if not isinstance(values, list):
        raise InvalidArgumentError(f"Expected an array at {where}, got {type(values).__name__}")
    return Row.from_values(values)


class ConvertCommand(BaseCommand):
    """
    Handle convert command.
    Streams rows from a JSON file into a spreadsheet file.
    """

    name = "convert"
    help = "Write rows from a JSON/JSON Lines file to a spreadsheet file"

    def execute(self, args: argparse.Namespace) -> int:
        """Execute convert flow."""
        options = self._writer_options(args)
        flush_threshold = self._config.flush_threshold

        if args.format:
            writer = WriterFactory.create_from_string(
                args.format, flush_threshold=flush_threshold, **options
            )
        else:
            writer = WriterFactory.create_from_destination(
                args.output, flush_threshold=flush_threshold, **options
            )

        with writer:
            writer.open(args.output)
            writer.add_rows(read_rows(args.input))
            count = writer.row_count

        print(f"\n✅ Wrote {count} rows to: {args.output}")
        return 0

    def _writer_options(self, args: argparse.Namespace) -> Dict[str, Any]:
        """Merge CLI flags over the csv config section."""
        section: Dict[str, Any] = dict(self._config.get_section("csv"))

        if args.delimiter is not None:
            section["field_delimiter"] = "\t" if args.delimiter == "\\t" else args.delimiter
        if args.enclosure is not None:
            section["field_enclosure"] = args.enclosure
        if args.no_bom:
            section["should_add_bom"] = False

        known: List[str] = ["field_delimiter", "field_enclosure", "should_add_bom"]
        return {key: section[key] for key in known if key in section}

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("input", help="JSON array of arrays, or .jsonl file")
        parser.add_argument("output", help="Destination file (extension selects format)")
        parser.add_argument(
            "-f", "--format",
            help="Output format, overriding the destination extension"
        )
        parser.add_argument(
            "-d", "--delimiter",
            help="Field delimiter (use \\t for tab)"
        )
        parser.add_argument(
            "-e", "--enclosure",
            help="Field enclosure character"
        )
        parser.add_argument(
            "--no-bom",
            action="store_true",
            help="Do not write a UTF-8 byte order mark"
        )


class FormatsCommand(BaseCommand):
    """
    Handle formats command.
    Lists formats that currently have a writer backend.
    """

    name = "formats"
    help = "List supported output formats"

    def execute(self, args: argparse.Namespace) -> int:
        """Execute formats listing."""
        _ = args  # Unused
        print("Supported formats:")
        for format_name in WriterFactory.get_supported_formats():
            print(f"  • {format_name}")
        return 0
