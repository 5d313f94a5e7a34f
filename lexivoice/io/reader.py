"""Source text reading.

Responsibilities:
- Stream a local text file line by line.
- Map missing files and mid-read I/O failures to stage-aware errors.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from ..errors import InputNotFoundError, InputReadError


class TextSourceReader:
    """Line-oriented reader for one source text file."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        """Initialize the reader with a source path and text encoding."""

        self.path = path
        self.encoding = encoding

    def lines(self) -> Iterator[str]:
        """Yield source lines without trailing newline characters.

        Raises:
            InputNotFoundError: If the source file does not exist.
            InputReadError: If the file cannot be opened or decoded to the end.
        """

        if not self.path.is_file():
            raise InputNotFoundError(
                stage="read",
                detail=f"File not found: {self.path}",
                hint="Pass an existing text file path or set `input_path` in the config.",
            )
        try:
            with self.path.open("r", encoding=self.encoding) as handle:
                for line in handle:
                    yield line.rstrip("\r\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputReadError(
                stage="read",
                detail=f"Error reading the file {self.path}: {exc}",
                hint="Check file permissions and the configured `encoding`.",
            ) from exc
