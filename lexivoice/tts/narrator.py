"""Speech orchestration for narrated text.

Responsibilities:
- Acquire a voice by name and an audio sink, and release both on every exit path.
- Split text into sentences and synthesize them in order with paced pauses.
- Continue past single-sentence synthesis failures; fail fast on resource errors.
"""

from __future__ import annotations

from typing import Callable

from ..errors import SpeechResourceError
from ..models.datatypes import NarrationResult
from ..telemetry.logger import RunLogger
from ..text.sentences import split_sentences
from .pacing import CancellationToken, Pacer
from .voices import AudioSink, Voice, VoiceRegistry

_STAGE = "narrate"


class _RecordingSinkGuard:
    """Pass-through sink remembering the first write failure of the real sink.

    Voice adapters may wrap any exception they see, so sink failures are told
    apart from synthesis failures by this record rather than by exception type.
    """

    def __init__(self, sink: AudioSink) -> None:
        self._sink = sink
        self.path = sink.path
        self.failure: Exception | None = None

    def write(self, frames: bytes, *, channels: int, sample_width: int, framerate: int) -> None:
        try:
            self._sink.write(
                frames, channels=channels, sample_width=sample_width, framerate=framerate
            )
        except (OSError, ValueError) as exc:
            if self.failure is None:
                self.failure = exc
            raise

    def write_silence(self, seconds: float) -> None:
        self._sink.write_silence(seconds)

    def close(self) -> None:
        self._sink.close()


class SpeechOrchestrator:
    """Drive a synthesis voice through one narration."""

    def __init__(
        self,
        registry: VoiceRegistry,
        pacer: Pacer | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize with a voice registry, pause strategy, and optional logger."""

        self._registry = registry
        self._pacer = pacer if pacer is not None else Pacer()
        self._run_logger = run_logger

    @property
    def cancellation(self) -> CancellationToken:
        return self._pacer.cancellation

    def narrate(
        self,
        text: str,
        voice_name: str,
        sink_factory: Callable[[], AudioSink],
    ) -> NarrationResult:
        """Narrate `text` with the named voice into a sink built by `sink_factory`.

        The sink factory is only called once a matching voice exists.

        Raises:
            SpeechResourceError: If the voice registry, voice allocation, or audio
                sink fails.
        """

        try:
            voice = self._registry.get_voice(voice_name)
        except Exception as exc:
            raise SpeechResourceError(
                stage=_STAGE,
                detail=f"Voice registry lookup failed for `{voice_name}`: {exc}",
                hint="Verify the speech engine and its voices are installed.",
            ) from exc

        if voice is None:
            self._warn("voice_not_found", voice=voice_name)
            return NarrationResult(voice_name=voice_name, status="voice_not_found")

        sentences = split_sentences(text)
        try:
            voice.allocate()
        except Exception as exc:
            raise SpeechResourceError(
                stage=_STAGE,
                detail=f"Voice `{voice_name}` could not be allocated: {exc}",
            ) from exc

        try:
            try:
                sink = sink_factory()
            except Exception as exc:
                raise SpeechResourceError(
                    stage=_STAGE,
                    detail=f"Audio sink could not be created: {exc}",
                    hint="Check that the output directory is writable.",
                ) from exc
            try:
                spoken, failed, cancelled = self._speak_all(voice, sink, sentences)
            except (OSError, ValueError) as exc:
                raise SpeechResourceError(
                    stage=_STAGE,
                    detail=f"Audio sink write failed: {exc}",
                ) from exc
            finally:
                sink.close()
        finally:
            voice.deallocate()

        return NarrationResult(
            voice_name=voice_name,
            status="cancelled" if cancelled else "completed",
            audio_path=sink.path,
            sentences=tuple(spoken),
            failed_sentences=tuple(failed),
        )

    def _speak_all(
        self, voice: Voice, sink: AudioSink, sentences: list[str]
    ) -> tuple[list[str], list[int], bool]:
        """Speak sentences in order; return submitted, failed positions, cancelled."""

        guarded = _RecordingSinkGuard(sink)
        spoken: list[str] = []
        failed: list[int] = []
        for position, sentence in enumerate(sentences, start=1):
            if self.cancellation.cancelled:
                self._warn("cancelled", sentence=position)
                return spoken, failed, True
            spoken.append(sentence)
            try:
                voice.speak(sentence, guarded)
            except Exception as exc:
                if guarded.failure is not None:
                    raise guarded.failure
                failed.append(position)
                self._warn(
                    "synthesis_failed",
                    sentence=position,
                    error_type=type(exc).__name__,
                )
            if guarded.failure is not None:
                raise guarded.failure
            if position < len(sentences):
                sink.write_silence(self._pacer.pause_seconds)
                self._pacer.pause()
        return spoken, failed, False

    def _warn(self, event: str, **context: object) -> None:
        if self._run_logger is not None:
            self._run_logger.log_warning(_STAGE, event, **context)
