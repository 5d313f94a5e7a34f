"""pyttsx3-backed voice registry and voice.

Responsibilities:
- Discover engine voices and match them by name or id.
- Render each sentence to a temporary WAV file and append its frames to the
  narration sink.

The eSpeak driver (Linux) and SAPI5 driver (Windows) write WAV output from
`save_to_file`; drivers that write another container surface as
`SynthesisError` for every sentence.
"""

from __future__ import annotations

from pathlib import Path
import tempfile
from typing import Any, Callable
import wave

import pyttsx3

from ..errors import SynthesisError
from .voices import AudioSink, VoiceProfile


class Pyttsx3Voice:
    """One pyttsx3 engine voice used for a single narration."""

    def __init__(
        self,
        profile: VoiceProfile,
        engine_factory: Callable[[], Any] = pyttsx3.init,
        rate: int | None = None,
    ) -> None:
        """Initialize with the selected profile and an engine factory."""

        self.profile = profile
        self.name = profile.name
        self._engine_factory = engine_factory
        self._rate = rate
        self._engine: Any | None = None

    def allocate(self) -> None:
        """Create the engine and select this voice."""

        engine = self._engine_factory()
        engine.setProperty("voice", self.profile.voice_id)
        if self._rate is not None:
            engine.setProperty("rate", self._rate)
        self._engine = engine

    def deallocate(self) -> None:
        """Stop the engine loop and drop the engine reference."""

        if self._engine is None:
            return
        try:
            self._engine.stop()
        finally:
            self._engine = None

    def speak(self, sentence: str, sink: AudioSink) -> None:
        """Synthesize `sentence` and append its frames to `sink`."""

        if self._engine is None:
            raise SynthesisError(f"Voice `{self.name}` is not allocated.")

        with tempfile.TemporaryDirectory(prefix="lexivoice-") as temp_dir:
            target = Path(temp_dir) / "sentence.wav"
            try:
                self._engine.save_to_file(sentence, str(target))
                self._engine.runAndWait()
                with wave.open(str(target), "rb") as wav_file:
                    channels = wav_file.getnchannels()
                    sample_width = wav_file.getsampwidth()
                    framerate = wav_file.getframerate()
                    frames = wav_file.readframes(wav_file.getnframes())
            except Exception as exc:
                raise SynthesisError(
                    f"Voice `{self.name}` failed to synthesize sentence: {exc}"
                ) from exc

        sink.write(frames, channels=channels, sample_width=sample_width, framerate=framerate)


class Pyttsx3VoiceRegistry:
    """Voice registry backed by the voices a pyttsx3 engine reports."""

    def __init__(
        self,
        engine_factory: Callable[[], Any] = pyttsx3.init,
        rate: int | None = None,
    ) -> None:
        self._engine_factory = engine_factory
        self._rate = rate

    def list_voices(self) -> list[VoiceProfile]:
        """Return profiles for all voices installed for the engine."""

        engine = self._engine_factory()
        profiles: list[VoiceProfile] = []
        for voice in engine.getProperty("voices") or ():
            profiles.append(VoiceProfile(name=str(voice.name or voice.id), voice_id=str(voice.id)))
        return profiles

    def get_voice(self, name: str) -> Pyttsx3Voice | None:
        """Return the first voice matching `name`, or `None`."""

        for profile in self.list_voices():
            if profile.matches(name):
                return Pyttsx3Voice(profile, engine_factory=self._engine_factory, rate=self._rate)
        return None
