"""
Narration and dictation tests.

Cloud TTS and the speech recognizer are replaced with in-process fakes.
"""

import io
import wave

import pytest
import speech_recognition as sr

from agrilearn.classroom import LessonPlayer, VirtualScheduler
from agrilearn.errors import DictationError
from agrilearn.voice import (
    CloudNarrator,
    RecordedClipDictation,
    SilentNarrator,
    TranscriptEvent,
    transcribe,
)
from agrilearn.voice import narration as narration_module


class FakeTTSResponse:
    def __init__(self, audio_content: bytes):
        self.audio_content = audio_content


class FakeTTSClient:
    def __init__(self, fail: bool = False, audio: bytes = b"mp3-bytes"):
        self.fail = fail
        self.audio = audio
        self.requests = []

    def synthesize_speech(self, input, voice, audio_config):
        self.requests.append((input, voice, audio_config))
        if self.fail:
            raise RuntimeError("quota exceeded")
        return FakeTTSResponse(self.audio)


class ManualClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeRecognizer(sr.Recognizer):
    def __init__(self, result=None, error=None):
        super().__init__()
        self.result = result
        self.error = error
        self.languages = []

    def recognize_google(self, audio_data, language="en-US", **kwargs):
        self.languages.append(language)
        if self.error is not None:
            raise self.error
        return self.result


class ListDictation:
    is_supported = True

    def __init__(self, events):
        self.events = events

    def listen(self, language):
        yield from self.events


@pytest.fixture
def wav_clip():
    """Half a second of 16 kHz mono silence."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(16000)
        wav.writeframes(b"\x00\x00" * 8000)
    return buffer.getvalue()


class TestCloudNarrator:
    """Test the Cloud TTS narrator."""

    def test_speak_synthesizes_clip(self):
        client = FakeTTSClient()
        narrator = CloudNarrator(client=client)

        narration = narrator.speak("Water early", "kn")

        assert narrator.is_supported
        assert narration.audio == b"mp3-bytes"
        assert narrator.is_speaking
        assert client.requests[0][1].language_code == "kn-IN"

    def test_audio_taken_once(self):
        narrator = CloudNarrator(client=FakeTTSClient())
        narrator.speak("Water early", "en")

        assert narrator.take_unplayed_audio() == b"mp3-bytes"
        assert narrator.take_unplayed_audio() is None

    def test_new_utterance_finishes_previous(self):
        narrator = CloudNarrator(client=FakeTTSClient())
        first = narrator.speak("one", "en")
        second = narrator.speak("two", "en")

        assert first.finished
        assert not second.finished
        assert narrator.current is second

    def test_stop(self):
        narrator = CloudNarrator(client=FakeTTSClient())
        narration = narrator.speak("one", "hi")
        narrator.stop()

        assert narration.finished
        assert not narrator.is_speaking
        assert narrator.take_unplayed_audio() is None

    def test_empty_text_not_spoken(self):
        client = FakeTTSClient()
        assert CloudNarrator(client=client).speak("", "en") is None
        assert client.requests == []

    def test_synthesis_failure_returns_none(self):
        narrator = CloudNarrator(client=FakeTTSClient(fail=True))
        assert narrator.speak("one", "en") is None
        assert not narrator.is_speaking

    def test_unavailable_client_disables_narration(self, monkeypatch):
        def no_credentials():
            raise RuntimeError("no credentials")

        monkeypatch.setattr(narration_module, "get_tts_client", no_credentials)
        narrator = CloudNarrator()

        assert not narrator.is_supported
        assert narrator.speak("one", "en") is None


class TestNarrationLifecycle:
    """Test when a played clip counts as finished."""

    def test_played_clip_finishes_after_its_length(self):
        clock = ManualClock()
        # 8000 bytes of 32 kbps MP3 is two seconds of audio
        narrator = CloudNarrator(client=FakeTTSClient(audio=b"\x00" * 8000), clock=clock)
        narration = narrator.speak("Water early", "en")

        narrator.take_unplayed_audio()
        clock.now = 1.9
        assert narrator.is_speaking
        clock.now = 2.0
        assert not narrator.is_speaking
        assert narration.finished

    def test_unplayed_clip_keeps_speaking(self):
        clock = ManualClock()
        narrator = CloudNarrator(client=FakeTTSClient(audio=b"\x00" * 8000), clock=clock)
        narrator.speak("Water early", "en")

        clock.now = 60.0
        assert narrator.is_speaking

    def test_listen_again_after_clip_ends(self, make_lesson):
        clock = ManualClock()
        client = FakeTTSClient(audio=b"\x00" * 8000)
        narrator = CloudNarrator(client=client, clock=clock)
        player = LessonPlayer(make_lesson(), VirtualScheduler(), narrator=narrator)

        player.toggle_voice()
        assert narrator.take_unplayed_audio() is not None
        clock.now = 5.0

        player.toggle_voice()

        assert len(client.requests) == 2
        assert narrator.is_speaking
        assert narrator.take_unplayed_audio() is not None

    def test_listen_while_playing_stops(self, make_lesson):
        clock = ManualClock()
        narrator = CloudNarrator(client=FakeTTSClient(audio=b"\x00" * 8000), clock=clock)
        player = LessonPlayer(make_lesson(), VirtualScheduler(), narrator=narrator)

        player.toggle_voice()
        narrator.take_unplayed_audio()
        clock.now = 1.0
        player.toggle_voice()

        assert not narrator.is_speaking
        assert narrator.take_unplayed_audio() is None

    def test_text_estimate_without_audio(self):
        narrator = CloudNarrator(client=FakeTTSClient(audio=b""), speaking_rate=1.0)
        narration = narrator.speak("x" * 28, "en")
        assert narration.seconds == 2.0


class TestSilentNarrator:
    def test_never_speaks(self):
        narrator = SilentNarrator()
        assert not narrator.is_supported
        assert narrator.speak("hello", "en") is None
        assert not narrator.is_speaking
        narrator.stop()


class TestDictation:
    """Test transcription of recorded clips."""

    def test_transcribe_joins_final_events(self):
        dictation = ListDictation([
            TranscriptEvent("how to", is_final=False),
            TranscriptEvent("how to stop"),
            TranscriptEvent(""),
            TranscriptEvent("leaf curl"),
        ])
        assert transcribe(dictation, "en") == "how to stop leaf curl"

    def test_recorded_clip(self, wav_clip):
        recognizer = FakeRecognizer(result="  पत्ती मुड़ना  ")
        text = transcribe(RecordedClipDictation(wav_clip, recognizer), "hi")

        assert text == "पत्ती मुड़ना"
        assert recognizer.languages == ["hi-IN"]

    def test_unknown_language_uses_english(self, wav_clip):
        recognizer = FakeRecognizer(result="hello")
        transcribe(RecordedClipDictation(wav_clip, recognizer), "ta")
        assert recognizer.languages == ["en-IN"]

    def test_unintelligible_speech_yields_nothing(self, wav_clip):
        recognizer = FakeRecognizer(error=sr.UnknownValueError())
        assert transcribe(RecordedClipDictation(wav_clip, recognizer), "en") == ""

    def test_service_error(self, wav_clip):
        recognizer = FakeRecognizer(error=sr.RequestError("offline"))
        with pytest.raises(DictationError):
            transcribe(RecordedClipDictation(wav_clip, recognizer), "en")
