"""
Dictation - Speech-to-text for spoken farmer questions.

Consumers read a stream of TranscriptEvents from `listen(language)`. The
Streamlit app records a WAV clip in the browser and hands it to
RecordedClipDictation, which transcribes it with SpeechRecognition.
"""

import io
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

import speech_recognition as sr

from agrilearn.errors import DictationError


logger = logging.getLogger(__name__)

RECOGNIZER_LANGUAGE_CODES = {
    "en": "en-IN",
    "hi": "hi-IN",
    "kn": "kn-IN",
}


@dataclass
class TranscriptEvent:
    text: str
    is_final: bool = True


class Dictation(Protocol):
    is_supported: bool

    def listen(self, language: str) -> Iterator[TranscriptEvent]:
        ...


class RecordedClipDictation:
    """Transcribe one recorded audio clip (WAV/AIFF/FLAC bytes)."""

    is_supported = True

    def __init__(self, audio: bytes, recognizer: Optional[sr.Recognizer] = None):
        self.audio = audio
        self.recognizer = recognizer or sr.Recognizer()

    def listen(self, language: str) -> Iterator[TranscriptEvent]:
        """
        Yield the transcript of the clip.

        Speech that cannot be understood yields nothing.

        Raises:
            DictationError: If the recognition service cannot be reached
        """
        with sr.AudioFile(io.BytesIO(self.audio)) as source:
            recorded = self.recognizer.record(source)

        code = RECOGNIZER_LANGUAGE_CODES.get(language, RECOGNIZER_LANGUAGE_CODES["en"])
        try:
            text = self.recognizer.recognize_google(recorded, language=code)
        except sr.UnknownValueError:
            logger.info("Speech not recognized")
            return
        except sr.RequestError as e:
            raise DictationError(f"Speech recognition service error: {e}") from e

        if text:
            yield TranscriptEvent(text=text.strip(), is_final=True)


def transcribe(dictation: Dictation, language: str) -> str:
    """Join the final transcript events of a dictation into one string."""
    parts = [event.text for event in dictation.listen(language) if event.is_final]
    return " ".join(part for part in parts if part)
