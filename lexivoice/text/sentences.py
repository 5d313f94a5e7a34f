"""Sentence splitting for narration."""

from __future__ import annotations

import re

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def split_sentences(text: str) -> list[str]:
    """Split text after `.`, `!`, or `?` followed by whitespace.

    A trailing fragment without a terminator is kept as the last sentence.
    Blank input yields an empty list.
    """

    stripped = text.strip()
    if not stripped:
        return []
    return [sentence for sentence in _SENTENCE_BOUNDARY.split(stripped) if sentence]
