"""Shared typed data models for Lexivoice.

This package contains dataclasses used across pipeline modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    AnnotatedSentence,
    CorefChain,
    DependencyEdge,
    DependencyGraph,
    Document,
    Lexeme,
    LexemeBuffer,
    Mention,
    NarrationResult,
    RunReport,
    SentenceArtifacts,
    Token,
)

__all__ = [
    "AnnotatedSentence",
    "CorefChain",
    "DependencyEdge",
    "DependencyGraph",
    "Document",
    "Lexeme",
    "LexemeBuffer",
    "Mention",
    "NarrationResult",
    "RunReport",
    "SentenceArtifacts",
    "Token",
]
