"""Lexivoice pipeline package.

This package contains orchestration, stage telemetry, and per-sentence artifact
writing for pipeline execution.
"""

from .artifacts import ArtifactWriter
from .orchestrator import LexivoicePipeline

__all__ = ["ArtifactWriter", "LexivoicePipeline"]
