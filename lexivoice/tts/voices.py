"""Voice and audio sink contracts for synthesis.

Responsibilities:
- Represent engine voice identities as declarative profiles.
- Define the registry, voice, and sink protocols the narrator depends on.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class VoiceProfile:
    """Declarative voice profile discovered from a speech engine.

    Attributes:
        name: Human-readable voice name.
        voice_id: Engine-native voice identifier.
    """

    name: str
    voice_id: str

    def matches(self, requested: str) -> bool:
        """Return whether a requested name identifies this voice.

        Matching is case-insensitive on the name, the full id, or the last path
        segment of the id (engines such as eSpeak expose ids like
        `gmw/en-us`).
        """

        token = requested.strip().lower()
        if not token:
            return False
        voice_id = self.voice_id.lower()
        return token in {self.name.lower(), voice_id, voice_id.rsplit("/", 1)[-1]}


class AudioSink(Protocol):
    """Destination receiving synthesized PCM frames in narration order."""

    path: Path | None

    def write(self, frames: bytes, *, channels: int, sample_width: int, framerate: int) -> None:
        """Append PCM frames with their format."""

    def write_silence(self, seconds: float) -> None:
        """Append silence in the format of previously written frames."""

    def close(self) -> None:
        """Finalize the container and release the destination."""


class Voice(Protocol):
    """Synthesis resource bound to one engine voice."""

    name: str

    def allocate(self) -> None:
        """Acquire engine resources before the first `speak` call."""

    def deallocate(self) -> None:
        """Release engine resources."""

    def speak(self, sentence: str, sink: AudioSink) -> None:
        """Synthesize one sentence into `sink`, raising `SynthesisError` on failure."""


class VoiceRegistry(Protocol):
    """Lookup of synthesis voices by name."""

    def get_voice(self, name: str) -> Voice | None:
        """Return a voice matching `name`, or `None` when no voice matches."""
