"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import sheetstream...' works
without an install, and provides shared writing helpers.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from sheetstream.core.entities import Row  # noqa: E402
from sheetstream.writer.csv_backend import BOM_UTF8, CSVBackend, CSVOptions  # noqa: E402
from sheetstream.writer.writer import Writer  # noqa: E402


def trim_written_content(content: bytes) -> str:
    """Remove the UTF-8 BOM and surrounding line feeds."""
    if content.startswith(BOM_UTF8):
        content = content[len(BOM_UTF8):]
    return content.decode("utf-8").strip("\n")


@pytest.fixture
def write_csv(tmp_path):
    """
    Return a helper writing rows of raw values to a CSV file in tmp_path
    and returning the raw bytes written.
    """
    def _write(all_values, file_name="out.csv", **options) -> bytes:
        path = tmp_path / file_name
        writer = Writer(CSVBackend(CSVOptions(**options)))
        writer.open(path)
        writer.add_rows([Row.from_values(values) for values in all_values])
        writer.close()
        return path.read_bytes()

    return _write
