"""Top-level package for Lexivoice.

This package tokenizes a text file into lexemes, annotates the reconstructed
text with an NLP engine, writes per-sentence linguistic artifacts, and narrates
the recovered sentences into a WAV file. The main orchestration entry point is
`LexivoicePipeline`.
"""

from .pipeline import LexivoicePipeline

__all__ = ["LexivoicePipeline", "__version__"]

__version__ = "0.1.0"
