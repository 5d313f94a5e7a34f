"""Unit tests for lexeme splitting, trimming, and classification."""

from __future__ import annotations

import re

import pytest

from lexivoice.models.datatypes import Lexeme, LexemeBuffer
from lexivoice.text.reconstruct import reconstruct
from lexivoice.text.tokenizer import classify_unit, split_units, tokenize_line, tokenize_lines


def _texts(line: str) -> list[str]:
    return [lexeme.text for lexeme in tokenize_line(line)]


def test_single_alphabetic_token_is_one_word_lexeme() -> None:
    """A plain word should produce exactly one word lexeme."""

    assert tokenize_line("hello") == [Lexeme(text="hello", kind="word")]


def test_punctuation_is_isolated_from_words() -> None:
    """Comma and exclamation mark should become standalone other lexemes."""

    lexemes = tokenize_line("Hello, world!")

    assert [lexeme.text for lexeme in lexemes] == ["Hello", ",", "world", "!"]
    assert [lexeme.kind for lexeme in lexemes] == ["word", "other", "word", "other"]


def test_hyphens_split_and_contractions_are_kept() -> None:
    """Hyphens should split compounds while `don't` keeps its apostrophe."""

    lexemes = tokenize_line("well-known don't")

    assert [lexeme.text for lexeme in lexemes] == ["well", "known", "don't"]
    assert lexemes[2].kind == "other"


def test_numbers_are_classified_separately_from_words() -> None:
    """Digit-only units should be number lexemes."""

    assert tokenize_line("42 apples") == [
        Lexeme(text="42", kind="number"),
        Lexeme(text="apples", kind="word"),
    ]


def test_mixed_alphanumeric_token_falls_through_untrimmed() -> None:
    """Mixed tokens such as `3rd` keep their raw form as other lexemes."""

    assert tokenize_line("the 3rd") == [
        Lexeme(text="the", kind="word"),
        Lexeme(text="3rd", kind="other"),
    ]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Wait...", ["Wait", "..."]),
        ("yes -- no", ["yes", "--", "no"]),
        ("'quoted'", ["quoted"]),
        ("(aside)", ["(", "aside", ")"]),
        ("What?!", ["What", "?!"]),
        ("rock'n'roll", ["rock'n'roll"]),
    ],
)
def test_punctuation_runs_survive_and_quote_apostrophes_split(
    line: str, expected: list[str]
) -> None:
    """Adjacent punctuation stays joined and quoting apostrophes act as delimiters."""

    assert _texts(line) == expected


def test_unicode_quotes_are_trimmed_as_residue() -> None:
    """Non-ASCII punctuation attached to a word is trimmed from the word form."""

    assert tokenize_line("“Hello”") == [Lexeme(text="Hello", kind="word")]


@pytest.mark.parametrize("line", ["", "   ", "\t\t", "- ' -", "a--b", "'''", "  ,  ", "x-"])
def test_no_empty_lexemes_are_emitted(line: str) -> None:
    """Blank, delimiter-only, and punctuation-heavy lines never yield empty lexemes."""

    assert all(lexeme.text for lexeme in tokenize_line(line))
    assert all(unit for unit in split_units(line))


def test_empty_line_yields_nothing() -> None:
    """Empty input should produce no lexemes and no error."""

    assert tokenize_line("") == []


def test_classify_unit_keeps_raw_form_for_unmatched_units() -> None:
    """Units that trim to nothing keep their original punctuation."""

    assert classify_unit("...") == Lexeme(text="...", kind="other")
    assert classify_unit("_name_") == Lexeme(text="name", kind="word")


def test_tokenize_lines_appends_in_source_order() -> None:
    """Lines should be tokenized into one buffer in order."""

    buffer = LexemeBuffer([Lexeme(text="Start", kind="word")])

    result = tokenize_lines(["One two.", "", "3 four"], buffer)

    assert result is buffer
    assert buffer.texts() == ["Start", "One", "two", ".", "3", "four"]


def test_reconstruction_keeps_words_and_numbers_in_order() -> None:
    """Reconstructed text should contain every word/number lexeme in order."""

    line = "On May 5, the well-known 'Blue' ship sailed 300 miles -- fast!"
    lexemes = tokenize_line(line)
    rebuilt = reconstruct(lexemes)

    expected = re.findall(r"[A-Za-z]+|[0-9]+", line)
    recovered = re.findall(r"[A-Za-z]+|[0-9]+", rebuilt)
    assert recovered == expected
    assert rebuilt == "On May 5 , the well known Blue ship sailed 300 miles -- fast !"
