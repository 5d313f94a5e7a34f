"""Annotation gateway contract.

Responsibilities:
- Define the protocol every NLP engine adapter satisfies.
- Reject unusable annotation results before downstream stages consume them.
"""

from __future__ import annotations

from typing import Protocol

from ..errors import AnnotationError
from ..models.datatypes import Document


class AnnotationGateway(Protocol):
    """Protocol for synchronous NLP annotation engines."""

    def annotate(self, text: str) -> Document:
        """Annotate text into sentences, tokens, dependencies, and coreference chains."""


def validate_document(document: object) -> Document:
    """Return `document` when it is usable, raise `AnnotationError` otherwise.

    A usable document is a `Document` whose sentences are numbered 1..N in order
    and each carry at least one token.
    """

    if not isinstance(document, Document):
        raise AnnotationError(
            stage="annotate",
            detail=f"Annotation engine returned `{type(document).__name__}`, expected a document.",
        )
    for position, sentence in enumerate(document.sentences, start=1):
        if sentence.index != position:
            raise AnnotationError(
                stage="annotate",
                detail=(
                    f"Annotated sentence at position {position} "
                    f"is numbered {sentence.index}."
                ),
            )
        if not sentence.tokens:
            raise AnnotationError(
                stage="annotate",
                detail=f"Annotated sentence {position} has no tokens.",
            )
    return document
