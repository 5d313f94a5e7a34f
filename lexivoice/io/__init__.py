"""Input/output stage components for Lexivoice.

This package contains the source text reader and the artifact storage used by
the pipeline.
"""

from .reader import TextSourceReader
from .storage import ArtifactStore

__all__ = ["ArtifactStore", "TextSourceReader"]
