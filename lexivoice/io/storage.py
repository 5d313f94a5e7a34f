"""Artifact storage abstraction.

Responsibilities:
- Provide deterministic filesystem storage for per-sentence text artifacts.
- Truncate existing artifacts on rewrite; artifacts are never appended to.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import ArtifactWriteError


class ArtifactStore:
    """Filesystem-backed artifact store rooted at one output directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with a root output directory."""

        self.root = root

    def path_for(self, relative_path: Path) -> Path:
        """Return the absolute-or-rooted path for a relative artifact name."""

        return self.root / relative_path

    def save_text(self, relative_path: Path, content: str) -> Path:
        """Save text content, replacing prior content, and return final path.

        Raises:
            ArtifactWriteError: If the directory or file cannot be written.
        """

        path = self.path_for(relative_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ArtifactWriteError(f"Failed to write artifact `{path}`: {exc}") from exc
        return path
