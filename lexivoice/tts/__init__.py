"""Text-to-speech abstractions.

This package contains voice and sink protocols, the pyttsx3 adapter, pacing
primitives, and the speech orchestrator used by the narration stage.
"""

from .narrator import SpeechOrchestrator
from .pacing import CancellationToken, Pacer
from .pyttsx3_voice import Pyttsx3Voice, Pyttsx3VoiceRegistry
from .voices import AudioSink, Voice, VoiceProfile, VoiceRegistry

__all__ = [
    "AudioSink",
    "CancellationToken",
    "Pacer",
    "Pyttsx3Voice",
    "Pyttsx3VoiceRegistry",
    "SpeechOrchestrator",
    "Voice",
    "VoiceProfile",
    "VoiceRegistry",
]
