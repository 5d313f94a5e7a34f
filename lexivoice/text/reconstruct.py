"""Text reconstruction from a lexeme buffer.

Joining lexemes with single spaces loses the original spacing around
punctuation (`Hello , world !`). Only lexeme identity and order are kept; the
annotation engine re-segments the text anyway.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models.datatypes import Lexeme


def reconstruct(buffer: Iterable[Lexeme]) -> str:
    """Join lexeme surface forms with a single separating space."""

    return " ".join(lexeme.text for lexeme in buffer)
