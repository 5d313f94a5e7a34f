"""Unit tests for narration sentence splitting and text reconstruction."""

from __future__ import annotations

from lexivoice.models.datatypes import Lexeme
from lexivoice.text.reconstruct import reconstruct
from lexivoice.text.sentences import split_sentences


def test_split_sentences_on_terminal_punctuation() -> None:
    """Each `.`, `!`, `?` followed by whitespace should end a sentence."""

    assert split_sentences("A. B! C?") == ["A.", "B!", "C?"]


def test_split_sentences_keeps_trailing_fragment() -> None:
    """A final fragment without terminator should still be narrated."""

    assert split_sentences("First one.   then the rest") == ["First one.", "then the rest"]


def test_split_sentences_ignores_terminators_without_whitespace() -> None:
    """Decimal points and abbreviations glued to text should not split."""

    assert split_sentences("Pi is 3.14 roughly. Yes") == ["Pi is 3.14 roughly.", "Yes"]


def test_split_sentences_on_blank_text_is_empty() -> None:
    """Blank narration text should produce no sentences."""

    assert split_sentences("  \n ") == []


def test_reconstruct_joins_with_single_spaces() -> None:
    """Lexemes are joined by one space regardless of their original spacing."""

    lexemes = [
        Lexeme(text="Hello", kind="word"),
        Lexeme(text=",", kind="other"),
        Lexeme(text="world", kind="word"),
        Lexeme(text="!", kind="other"),
    ]

    assert reconstruct(lexemes) == "Hello , world !"
    assert reconstruct([]) == ""
