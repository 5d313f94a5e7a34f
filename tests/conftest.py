"""Shared pytest fixtures for the full Lexivoice test suite."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from lexivoice.telemetry.logger import RunLogger


@pytest.fixture
def log_stream() -> io.StringIO:
    """Provide an in-memory sink for structured run log lines."""

    return io.StringIO()


@pytest.fixture
def run_logger(log_stream: io.StringIO) -> RunLogger:
    """Provide a run logger writing DEBUG-level events into `log_stream`."""

    return RunLogger(sink=log_stream, level="DEBUG")


@pytest.fixture
def source_text(tmp_path: Path) -> Path:
    """Write a small multi-line source text file and return its path."""

    path = tmp_path / "Readable.txt"
    path.write_text(
        "Alice met Bob in Paris.\nThey walked 42 blocks!\nDid it rain?\n",
        encoding="utf-8",
    )
    return path
