"""Unit tests for source text reading and its error taxonomy."""

from __future__ import annotations

from pathlib import Path

import pytest

from lexivoice.errors import InputNotFoundError, InputReadError
from lexivoice.io.reader import TextSourceReader


def test_reader_yields_lines_without_newlines(tmp_path: Path) -> None:
    """Lines should be streamed in order with line endings removed."""

    path = tmp_path / "in.txt"
    path.write_bytes(b"first line\r\nsecond\n\nlast")

    assert list(TextSourceReader(path).lines()) == ["first line", "second", "", "last"]


def test_reader_reports_missing_file(tmp_path: Path) -> None:
    """A missing source should raise before any line is produced."""

    reader = TextSourceReader(tmp_path / "absent.txt")

    with pytest.raises(InputNotFoundError) as exc_info:
        next(reader.lines())

    assert exc_info.value.stage == "read"
    assert "File not found" in exc_info.value.detail


def test_reader_reports_decode_failure_mid_read(tmp_path: Path) -> None:
    """Undecodable bytes should surface as a read failure."""

    path = tmp_path / "binary.txt"
    path.write_bytes(b"good line\n\xff\xfe\xfa broken\n")

    with pytest.raises(InputReadError, match="Error reading the file"):
        list(TextSourceReader(path, encoding="utf-8").lines())


def test_reader_honors_configured_encoding(tmp_path: Path) -> None:
    """Non-UTF-8 sources should decode with the configured encoding."""

    path = tmp_path / "latin.txt"
    path.write_bytes("café\n".encode("latin-1"))

    assert list(TextSourceReader(path, encoding="latin-1").lines()) == ["café"]
