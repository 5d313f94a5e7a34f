"""Lexeme tokenizer for raw source lines.

Responsibilities:
- Split one line into raw units on whitespace, hyphen, apostrophe, and
  punctuation boundaries.
- Classify each unit as a word, number, or other lexeme.

Classification is shape-based: a unit is trimmed of surrounding characters
that are neither alphanumeric nor apostrophes, then matched against ASCII word
and number patterns. Units that match neither keep their raw form, so
punctuation runs such as `...` or `--` survive as their own lexemes and mixed
tokens such as `3rd` are emitted untouched.
"""

from __future__ import annotations

from collections.abc import Iterable
import re
import string

from ..models.datatypes import Lexeme, LexemeBuffer

# Apostrophes inside words belong to the word; hyphens are handled as delimiters.
_PUNCTUATION = string.punctuation.replace("'", "")
_PUNCT = f"[{re.escape(_PUNCTUATION)}]"
_NON_PUNCT = rf"[^{re.escape(_PUNCTUATION)}\s]"

_DELIMITER = re.compile(
    r"\s+"
    r"|(?<=[A-Za-z0-9])-+"
    r"|-+(?=[A-Za-z0-9])"
    r"|(?<![A-Za-z])'+"
    r"|'+(?![A-Za-z])"
    rf"|(?<={_PUNCT})(?={_NON_PUNCT})"
    rf"|(?<={_NON_PUNCT})(?={_PUNCT})"
)
_EDGE_RESIDUE = re.compile(r"^(?:[^\w']|_)+|(?:[^\w']|_)+$")
_WORD = re.compile(r"[A-Za-z]+")
_NUMBER = re.compile(r"[0-9]+")


def split_units(line: str) -> list[str]:
    """Split a line into non-empty raw units in source order."""

    return [unit for unit in _DELIMITER.split(line) if unit]


def classify_unit(unit: str) -> Lexeme:
    """Classify one raw unit and choose the surface form to emit."""

    trimmed = _EDGE_RESIDUE.sub("", unit)
    if _WORD.fullmatch(trimmed):
        return Lexeme(text=trimmed, kind="word")
    if _NUMBER.fullmatch(trimmed):
        return Lexeme(text=trimmed, kind="number")
    return Lexeme(text=unit, kind="other")


def tokenize_line(line: str) -> list[Lexeme]:
    """Convert one line of raw text into an ordered list of lexemes.

    Empty lines yield an empty list. The function never raises for malformed
    input and never emits an empty lexeme.
    """

    return [classify_unit(unit) for unit in split_units(line)]


def tokenize_lines(lines: Iterable[str], buffer: LexemeBuffer | None = None) -> LexemeBuffer:
    """Tokenize lines in order into a new or existing lexeme buffer."""

    target = buffer if buffer is not None else LexemeBuffer()
    for line in lines:
        target.extend(tokenize_line(line))
    return target
