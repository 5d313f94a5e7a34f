"""Audio output components.

This package contains the WAV sink that receives narrated sentences.
"""

from .wav_sink import WavAudioSink

__all__ = ["WavAudioSink"]
