"""
AgriLearn Voice - Narration and dictation capabilities.

This module provides:
- Narrator protocol with CloudNarrator (Google Cloud TTS) and SilentNarrator
- Dictation protocol with RecordedClipDictation (SpeechRecognition)
"""

from .narration import (
    Narration,
    Narrator,
    SilentNarrator,
    CloudNarrator,
    VOICE_LANGUAGE_CODES,
)

from .dictation import (
    TranscriptEvent,
    Dictation,
    RecordedClipDictation,
    transcribe,
)

__all__ = [
    # Narration
    "Narration",
    "Narrator",
    "SilentNarrator",
    "CloudNarrator",
    "VOICE_LANGUAGE_CODES",
    # Dictation
    "TranscriptEvent",
    "Dictation",
    "RecordedClipDictation",
    "transcribe",
]
