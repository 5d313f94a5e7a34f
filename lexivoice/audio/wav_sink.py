"""WAV narration sink.

Responsibilities:
- Append synthesized PCM chunks into one WAV container in narration order.
- Fix audio parameters from the first chunk and reject incompatible chunks.
- Keep silence requested before the first chunk and write it once the format is known.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO
import wave


class WavAudioSink:
    """Single-file WAV writer used as the narration audio sink.

    The destination file is created (or truncated) on construction so an
    unwritable location fails at acquisition time.
    """

    def __init__(
        self,
        path: Path,
        default_channels: int = 1,
        default_sample_width: int = 2,
        default_framerate: int = 22050,
    ) -> None:
        self.path = path
        self._defaults = (default_channels, default_sample_width, default_framerate)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._handle: BinaryIO | None = path.open("wb")
        self._writer: wave.Wave_write | None = None
        self._params: tuple[int, int, int] | None = None
        self._pending_silence = 0.0

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _open_writer(self, params: tuple[int, int, int]) -> wave.Wave_write:
        if self._handle is None:
            raise ValueError(f"Audio sink `{self.path}` is closed.")
        writer = wave.open(self._handle, "wb")
        channels, sample_width, framerate = params
        writer.setnchannels(channels)
        writer.setsampwidth(sample_width)
        writer.setframerate(framerate)
        self._writer = writer
        self._params = params
        if self._pending_silence > 0.0:
            self._write_silence_frames(writer, params, self._pending_silence)
            self._pending_silence = 0.0
        return writer

    @staticmethod
    def _write_silence_frames(
        writer: wave.Wave_write, params: tuple[int, int, int], seconds: float
    ) -> None:
        channels, sample_width, framerate = params
        frame_count = int(round(framerate * seconds))
        # 8-bit PCM is unsigned, so its zero level is 0x80.
        zero = b"\x80" if sample_width == 1 else b"\x00" * sample_width
        writer.writeframes(zero * channels * frame_count)

    def write(self, frames: bytes, *, channels: int, sample_width: int, framerate: int) -> None:
        """Append PCM frames, opening the container with their parameters if needed."""

        params = (channels, sample_width, framerate)
        writer = self._writer
        if writer is None:
            writer = self._open_writer(params)
        elif params != self._params:
            raise ValueError(
                f"Incompatible WAV parameters for `{self.path}`: "
                f"expected {self._params}, got {params}."
            )
        writer.writeframes(frames)

    def write_silence(self, seconds: float) -> None:
        """Append silence; held back until the first chunk fixes the format."""

        if self._handle is None:
            raise ValueError(f"Audio sink `{self.path}` is closed.")
        if seconds <= 0.0:
            return
        if self._writer is None or self._params is None:
            self._pending_silence += seconds
            return
        self._write_silence_frames(self._writer, self._params, seconds)

    def close(self) -> None:
        """Finalize the WAV header and close the file; safe to call twice.

        Silence still pending is written with the default parameters.
        """

        if self._handle is None:
            return
        try:
            writer = self._writer if self._writer is not None else self._open_writer(self._defaults)
            writer.close()
        finally:
            self._handle.close()
            self._handle = None
            self._writer = None
