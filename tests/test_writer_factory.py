"""
Tests for WriterFactory: extension dispatch, registration and errors.
"""

import io

import pytest

from sheetstream import create_from_destination
from sheetstream.core.entities import Row
from sheetstream.core.exceptions import UnsupportedFormatError
from sheetstream.core.interfaces import FormatBackend, WriterState
from sheetstream.writer.csv_backend import CSVBackend, TSVBackend
from sheetstream.writer.writer import Writer
from sheetstream.writer.writer_factory import WriterFactory, WriterFormat


class FakeArchiveBackend(FormatBackend):
    """Stand-in for an archive based backend supplied by another package."""

    def __init__(self, **options):
        super().__init__("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", ".xlsx")
        self.options = options
        self.rows = []

    def open(self, sink):
        sink.write(b"PK")

    def write_row(self, sink, row):
        self.rows.append(row.to_values())

    def close(self, sink):
        sink.write(b"END")


@pytest.fixture
def xlsx_backend_registered():
    WriterFactory.register(WriterFormat.XLSX, FakeArchiveBackend)
    yield
    WriterFactory.unregister(WriterFormat.XLSX)


def test_create_from_destination_csv(tmp_path):
    writer = WriterFactory.create_from_destination(str(tmp_path / "csv_test_create_from_file.csv"))
    assert isinstance(writer, Writer)
    assert isinstance(writer.backend, CSVBackend)


def test_create_from_destination_csv_all_caps():
    writer = WriterFactory.create_from_destination("csv_test_create_from_file.CSV")
    assert isinstance(writer.backend, CSVBackend)


def test_create_from_destination_tsv():
    writer = WriterFactory.create_from_destination("data.tsv")
    assert isinstance(writer.backend, TSVBackend)


def test_create_from_destination_performs_no_io(tmp_path):
    path = tmp_path / "never_created.csv"
    writer = WriterFactory.create_from_destination(str(path))

    assert writer.state is WriterState.CREATED
    assert not path.exists()


def test_create_from_destination_unsupported_extension():
    with pytest.raises(UnsupportedFormatError) as exc_info:
        WriterFactory.create_from_destination("test_unsupported_file_type.other")

    assert exc_info.value.extension == "other"
    assert "other" in str(exc_info.value)


def test_module_level_create_from_destination_unknown():
    with pytest.raises(UnsupportedFormatError):
        create_from_destination("x.unknown")


def test_create_from_destination_without_extension():
    with pytest.raises(UnsupportedFormatError) as exc_info:
        WriterFactory.create_from_destination("no_extension")
    assert exc_info.value.extension is None


@pytest.mark.parametrize("path", ["report.xlsx", "report.ods"])
def test_archive_formats_need_a_registered_backend(path):
    with pytest.raises(UnsupportedFormatError) as exc_info:
        WriterFactory.create_from_destination(path)
    assert exc_info.value.extension == path.rsplit(".", 1)[1]


def test_registered_archive_backend_is_used(xlsx_backend_registered):
    writer = WriterFactory.create_from_destination("report.XLSX")
    assert isinstance(writer.backend, FakeArchiveBackend)
    assert "xlsx" in WriterFactory.get_supported_formats()

    sink = io.BytesIO()
    writer.open(sink)
    writer.add_row(Row.from_values(["a", 1]))
    writer.close()

    assert sink.getvalue() == b"PKEND"
    assert writer.backend.rows == [["a", 1]]


def test_each_writer_gets_its_own_backend():
    first = WriterFactory.create(WriterFormat.CSV)
    second = WriterFactory.create(WriterFormat.CSV)
    assert first.backend is not second.backend


def test_options_are_forwarded_to_backend():
    writer = WriterFactory.create_from_destination(
        "out.csv", field_delimiter=";", should_add_bom=False, flush_threshold=10
    )
    assert writer.backend.options.field_delimiter == ";"
    assert writer.backend.options.should_add_bom is False
    assert writer.flush_threshold == 10


def test_create_from_string_is_case_insensitive():
    writer = WriterFactory.create_from_string(".CSV")
    assert isinstance(writer.backend, CSVBackend)


def test_supported_formats_default():
    assert WriterFactory.get_supported_formats() == ["csv", "tsv"]
