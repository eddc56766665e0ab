"""Shared fixtures: temporary stores, fake narrator and fake model client."""

import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from agrilearn.classroom import LessonStore, OfflineCache
from agrilearn.schemas import Lesson, LocalizedText, Slide


class FakeNarrator:
    """Records speak/stop calls instead of producing audio."""

    def __init__(self, is_supported: bool = True):
        self.is_supported = is_supported
        self.spoken: list[tuple[str, str]] = []
        self.stop_calls = 0
        self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    def speak(self, text: str, language: str):
        if not self.is_supported:
            return None
        self.spoken.append((text, language))
        self._speaking = True
        return None

    def stop(self):
        self.stop_calls += 1
        self._speaking = False


class FakeClient:
    """Returns canned replies (or raises) and records every prompt."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    def generate(self, system_prompt: str, user_prompt: str, temperature=None) -> str:
        self.calls.append({
            "system": system_prompt,
            "user": user_prompt,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        return self.reply


class FlakyStore(LessonStore):
    """LessonStore whose writes can be switched to fail."""

    fail_writes = False

    def set(self, key: str, value: str):
        if self.fail_writes:
            raise sqlite3.OperationalError("disk I/O error")
        super().set(key, value)


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self):
        self.current = datetime(2024, 7, 1, 6, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def store(tmp_path):
    return LessonStore(tmp_path / "offline.db")


@pytest.fixture
def flaky_store(tmp_path):
    return FlakyStore(tmp_path / "offline.db")


@pytest.fixture
def cache(store):
    return OfflineCache(store, is_online=True, clock=StepClock())


@pytest.fixture
def narrator():
    return FakeNarrator()


@pytest.fixture
def make_lesson():
    """Factory for lessons with N slides of the given durations."""

    def _make(
        lesson_id: str = "1",
        title: str = "Tomato Blight Basics",
        durations: Optional[list[int]] = None,
        **extra,
    ) -> Lesson:
        durations = [5, 5, 5] if durations is None else durations
        slides = [
            Slide(
                title=f"Step {i + 1}",
                text=LocalizedText(
                    base=f"Slide {i + 1} text",
                    hi=f"स्लाइड {i + 1}",
                    kn=None,
                ),
                emoji="🍅",
                duration=duration,
            )
            for i, duration in enumerate(durations)
        ]
        return Lesson(
            id=lesson_id,
            title=LocalizedText(base=title, hi="टमाटर झुलसा की मूल बातें"),
            content=LocalizedText(base="Blight spreads in humid weather."),
            slides=slides,
            crop_type="tomato",
            lesson_type="disease",
            **extra,
        )

    return _make


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def silent_narrator():
    return FakeNarrator(is_supported=False)


@pytest.fixture
def fake_client():
    """Factory for FakeClient instances."""
    return FakeClient
