"""Domain exceptions for pipeline and CLI diagnostics.

Fatal failures subclass `PipelineStageError` so the CLI can render them with the
stage that raised them. Non-fatal failures (`ArtifactWriteError`,
`SynthesisError`) are caught at the component that produced them and reported
through logs and result records.
"""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a specific pipeline stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped pipeline error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class InputNotFoundError(PipelineStageError):
    """Raised when the source text file does not exist."""


class InputReadError(PipelineStageError):
    """Raised when the source text file cannot be read to the end."""


class AnnotationError(PipelineStageError):
    """Raised when the annotation engine fails or returns an unusable document."""


class SpeechResourceError(PipelineStageError):
    """Raised when a voice or audio sink cannot be acquired for narration."""


class ArtifactWriteError(OSError):
    """Raised by artifact sinks when one artifact file cannot be written."""


class SynthesisError(RuntimeError):
    """Raised by a voice when one sentence cannot be synthesized."""
