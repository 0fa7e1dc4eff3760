"""
Tests for the CSV backend: encoding, escaping, BOM handling and options.
"""

import csv
import io
from decimal import Decimal

import pytest

from sheetstream.core.entities import Cell, Row
from sheetstream.core.exceptions import InvalidArgumentError, WriterIOError
from sheetstream.writer.csv_backend import (
    BOM_UTF8,
    CSVBackend,
    CSVOptions,
    TSVBackend,
    cell_to_text,
)

from conftest import trim_written_content


# ============================================================================
# Written content
# ============================================================================

def test_write_should_add_utf8_bom(write_csv):
    content = write_csv([["csv--11", "csv--12"]])
    assert content.startswith(BOM_UTF8)


def test_write_should_not_add_utf8_bom(write_csv):
    content = write_csv([["csv--11", "csv--12"]], should_add_bom=False)
    assert BOM_UTF8 not in content
    assert content == b"csv--11,csv--12\n"


def test_write_simple_row(write_csv):
    content = write_csv([["csv--11", "csv--12"]])
    assert trim_written_content(content) == "csv--11,csv--12"


def test_write_should_support_null_values(write_csv):
    content = write_csv([["csv--11", None, "csv--13"]])
    assert trim_written_content(content) == "csv--11,,csv--13"


def test_write_should_not_skip_empty_rows(write_csv):
    content = write_csv([
        ["csv--11", "csv--12"],
        [],
        ["csv--31", "csv--32"],
    ])
    assert trim_written_content(content) == "csv--11,csv--12\n\ncsv--31,csv--32"


def test_write_should_support_custom_field_delimiter(write_csv):
    content = write_csv(
        [
            ["csv--11", "csv--12", "csv--13"],
            ["csv--21", "csv--22", "csv--23"],
        ],
        field_delimiter="|",
    )
    assert trim_written_content(content) == "csv--11|csv--12|csv--13\ncsv--21|csv--22|csv--23"


def test_write_should_support_custom_field_enclosure(write_csv):
    content = write_csv([["This is, a comma", "csv--12", "csv--13"]], field_enclosure="#")
    assert trim_written_content(content) == "#This is, a comma#,csv--12,csv--13"


def test_write_should_double_enclosure_and_leave_backslashes(write_csv):
    content = write_csv([['"csv--11"', "csv--12\\", "csv--13\\\\", "csv--14\\\\\\"]])
    assert trim_written_content(content) == '"""csv--11""",csv--12\\,csv--13\\\\,csv--14\\\\\\'


def test_fields_with_line_breaks_are_enclosed(write_csv):
    content = write_csv([["line one\nline two", "cr\rhere", "plain"]], should_add_bom=False)
    assert content == b'"line one\nline two","cr\rhere",plain\n'


def test_zero_rows_produce_only_bom(write_csv):
    assert write_csv([]) == BOM_UTF8
    assert write_csv([], file_name="no_bom.csv", should_add_bom=False) == b""


def test_non_ascii_text_is_utf8(write_csv):
    content = write_csv([["café", "日本"]], should_add_bom=False)
    assert content.decode("utf-8") == "café,日本\n"


def test_written_rows_round_trip_through_csv_reader(write_csv):
    rows = [
        ["plain", "with, comma", 'with "quotes"'],
        [],
        ["multi\nline", "", "trailing space "],
        ["a", "b", "c"],
    ]
    content = write_csv(rows)

    text = content.decode("utf-8-sig")
    records = list(csv.reader(io.StringIO(text, newline="")))

    assert len(records) == len(rows)
    assert records == rows


# ============================================================================
# Cell rendering
# ============================================================================

@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("text", "text"),
        (7, "7"),
        (2.5, "2.5"),
        (3.0, "3"),
        (Decimal("1.10"), "1.10"),
        (True, "1"),
        (False, ""),
    ],
)
def test_cell_to_text(value, expected):
    assert cell_to_text(Cell.from_value(value)) == expected


def test_error_cell_renders_its_code():
    assert cell_to_text(Cell.error("#N/A")) == "#N/A"


def test_mixed_types_in_one_row(write_csv):
    content = write_csv([[1, 2.5, 3.0, True, False, "x"]], should_add_bom=False)
    assert content == b"1,2.5,3,1,,x\n"


# ============================================================================
# Backend hooks
# ============================================================================

def test_encode_row_is_one_record():
    backend = CSVBackend()
    assert backend.encode_row(Row.from_values(["a", "b"])) == b"a,b\n"
    assert backend.encode_row(Row.from_values([])) == b"\n"


def test_style_is_ignored():
    from sheetstream.core.entities import Style

    backend = CSVBackend()
    styled = Row.from_values(["a"], style=Style(name="bold"))
    assert backend.encode_row(styled) == b"a\n"


def test_close_resets_written_row_counter():
    backend = CSVBackend()
    sink = io.BytesIO()
    backend.open(sink)
    backend.write_row(sink, Row.from_values(["a"]))
    backend.write_row(sink, Row.from_values(["b"]))
    assert backend.written_rows == 2

    backend.close(sink)
    assert backend.written_rows == 0


def test_write_row_failure_raises_writer_io_error():
    backend = CSVBackend()
    sink = io.BytesIO()
    sink.close()

    with pytest.raises(WriterIOError):
        backend.write_row(sink, Row.from_values(["a"]))
    assert backend.written_rows == 0


def test_write_io_error_is_an_ioerror():
    backend = CSVBackend()
    sink = io.BytesIO()
    sink.close()

    with pytest.raises(IOError):
        backend.open(sink)


def test_content_type_is_per_instance():
    assert CSVBackend().content_type == "text/csv; charset=UTF-8"
    assert TSVBackend().content_type == "text/tab-separated-values; charset=UTF-8"
    assert CSVBackend().file_extension == ".csv"
    assert TSVBackend().file_extension == ".tsv"


def test_tsv_backend_uses_tab_delimiter():
    backend = TSVBackend(CSVOptions(should_add_bom=False))
    assert backend.options.field_delimiter == "\t"
    assert backend.options.should_add_bom is False
    assert backend.encode_row(Row.from_values(["a", "b\tc"])) == b'a\t"b\tc"\n'


# ============================================================================
# Options
# ============================================================================

def test_default_options():
    options = CSVOptions()
    assert options.field_delimiter == ","
    assert options.field_enclosure == '"'
    assert options.should_add_bom is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"field_delimiter": ""},
        {"field_delimiter": ";;"},
        {"field_enclosure": ""},
        {"field_delimiter": "\n"},
        {"field_delimiter": "#", "field_enclosure": "#"},
        {"should_add_bom": "yes"},
    ],
)
def test_invalid_options_are_rejected(kwargs):
    with pytest.raises(InvalidArgumentError):
        CSVOptions(**kwargs)


def test_options_from_mapping_ignores_unknown_keys():
    options = CSVOptions.from_mapping({"field_delimiter": ";", "unrelated": 1})
    assert options.field_delimiter == ";"
    assert options.field_enclosure == '"'
