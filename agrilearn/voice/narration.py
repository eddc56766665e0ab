"""
Narration - Text-to-speech for slides, quiz explanations and answers.

The playback engine and quiz session depend only on the Narrator protocol.
CloudNarrator synthesizes MP3 clips with Google Cloud TTS; the Streamlit app
plays each new clip once. A clip counts as finished once its estimated
length has elapsed after it was handed to the app, or when it is stopped.
SilentNarrator stands in where TTS is unavailable.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol


logger = logging.getLogger(__name__)

# App language -> TTS voice locale
VOICE_LANGUAGE_CODES = {
    "en": "en-IN",
    "hi": "hi-IN",
    "kn": "kn-IN",
}
DEFAULT_SPEAKING_RATE = 0.9

# Cloud TTS MP3 output is 32 kbps
MP3_BYTES_PER_SECOND = 32000 / 8
# Rough speech rate at speaking_rate 1.0, for clips without audio
CHARS_PER_SECOND = 14.0


@dataclass
class Narration:
    """One spoken utterance; `finished` is its completion signal."""
    text: str
    language: str
    audio: Optional[bytes] = None
    seconds: float = 0.0
    finished: bool = False
    played: bool = False
    ends_at: Optional[float] = None

    def finish(self):
        self.finished = True

    def start(self, now: float):
        """Mark the clip as handed to the player at `now`."""
        self.played = True
        self.ends_at = now + self.seconds


class Narrator(Protocol):
    is_supported: bool

    @property
    def is_speaking(self) -> bool:
        ...

    def speak(self, text: str, language: str) -> Optional[Narration]:
        ...

    def stop(self):
        ...


class SilentNarrator:
    """Narrator for hosts without speech synthesis."""

    is_supported = False

    @property
    def is_speaking(self) -> bool:
        return False

    def speak(self, text: str, language: str) -> Optional[Narration]:
        return None

    def stop(self):
        pass


def get_tts_client():
    """Get Google Cloud TTS client."""
    from google.cloud import texttospeech
    return texttospeech.TextToSpeechClient()


class CloudNarrator:
    """
    Narrator backed by Google Cloud Text-to-Speech.

    Support is detected once, when the client is created. Starting a new
    utterance finishes the previous one.
    """

    def __init__(
        self,
        client=None,
        speaking_rate: float = DEFAULT_SPEAKING_RATE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the narrator.

        Args:
            client: TextToSpeechClient (default: created from ambient credentials)
            speaking_rate: Slightly slower than normal for listening farmers
            clock: Monotonic seconds, used to tell when a played clip has ended
        """
        self.speaking_rate = speaking_rate
        self._clock = clock
        self._current: Optional[Narration] = None
        try:
            self._client = client or get_tts_client()
            self.is_supported = True
        except Exception as e:
            logger.warning(f"Text-to-speech unavailable, narration disabled: {e}")
            self._client = None
            self.is_supported = False

    @property
    def is_speaking(self) -> bool:
        narration = self._current
        if narration is None or narration.finished:
            return False
        if narration.ends_at is not None and self._clock() >= narration.ends_at:
            narration.finish()
            return False
        return True

    @property
    def current(self) -> Optional[Narration]:
        return self._current

    def speak(self, text: str, language: str) -> Optional[Narration]:
        """
        Synthesize `text` in `language`.

        Returns:
            The new Narration, or None if unsupported, empty or failed
        """
        if not self.is_supported or not text:
            return None

        self.stop()

        try:
            audio = self._synthesize(text, language)
        except Exception as e:
            logger.error(f"TTS synthesis failed ({language}): {e}")
            return None

        narration = Narration(
            text=text,
            language=language,
            audio=audio,
            seconds=self._estimate_seconds(text, audio),
        )
        self._current = narration
        logger.info(f"TTS started: {language}")
        return narration

    def stop(self):
        if self._current is not None:
            self._current.finish()
            self._current = None

    def take_unplayed_audio(self) -> Optional[bytes]:
        """Return the current clip's audio the first time it is asked for."""
        narration = self._current
        if narration is None or narration.finished or narration.played:
            return None
        narration.start(self._clock())
        return narration.audio

    def _estimate_seconds(self, text: str, audio: Optional[bytes]) -> float:
        if audio:
            return len(audio) / MP3_BYTES_PER_SECOND
        return len(text) / (CHARS_PER_SECOND * self.speaking_rate)

    def _synthesize(self, text: str, language: str) -> bytes:
        from google.cloud import texttospeech

        synthesis_input = texttospeech.SynthesisInput(text=text)
        voice = texttospeech.VoiceSelectionParams(
            language_code=VOICE_LANGUAGE_CODES.get(language, VOICE_LANGUAGE_CODES["en"]),
        )
        audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding.MP3,
            speaking_rate=self.speaking_rate,
        )
        response = self._client.synthesize_speech(
            input=synthesis_input,
            voice=voice,
            audio_config=audio_config,
        )
        return response.audio_content
