"""Text tokenization, reconstruction, and sentence splitting.

This package provides the deterministic text building blocks used before the
annotation and narration stages.
"""

from .reconstruct import reconstruct
from .sentences import split_sentences
from .tokenizer import classify_unit, split_units, tokenize_line, tokenize_lines

__all__ = [
    "classify_unit",
    "reconstruct",
    "split_sentences",
    "split_units",
    "tokenize_line",
    "tokenize_lines",
]
