"""
Lesson content schemas for AgriLearn.

Defines Pydantic models for:
- Slides (one timed step of lesson playback)
- Lessons (localized text, key points, slides and classification tags)

Lessons are stored and exchanged as flat records (`title_hi`, `keyPoints_kn`,
`cropType`, ...). `Lesson.from_record` and `Lesson.to_record` convert between
that layout and the models.
"""

import math
import threading
import time
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from .localized import LocalizedList, LocalizedText


DEFAULT_SLIDE_SECONDS = 8
SYNTHETIC_SLIDE_SECONDS = 15
SYNTHETIC_SLIDE_EMOJI = "📚"

# Flat record key -> model field, for the optional classification tags
_TAG_KEYS = {
    "cropType": "crop_type",
    "lessonType": "lesson_type",
    "difficulty": "difficulty",
    "region": "region",
    "season": "season",
}

_id_lock = threading.Lock()
_last_id = 0


def new_lesson_id() -> str:
    """
    Allocate a lesson id from the current time in milliseconds.

    Ids are strictly increasing within a process, so two lessons created in
    the same millisecond still get distinct ids.
    """
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


class Slide(BaseModel):
    text: LocalizedText
    title: Optional[str] = None
    emoji: Optional[str] = None
    duration: int = DEFAULT_SLIDE_SECONDS  # seconds

    @field_validator("duration", mode="before")
    @classmethod
    def _default_duration(cls, value: Any) -> int:
        try:
            raw = float(value)
        except (TypeError, ValueError):
            return DEFAULT_SLIDE_SECONDS
        if not math.isfinite(raw):
            return DEFAULT_SLIDE_SECONDS
        seconds = int(raw)
        return seconds if seconds > 0 else DEFAULT_SLIDE_SECONDS

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Slide":
        return cls(
            text=LocalizedText.from_flat(data, "text") or LocalizedText(),
            title=data.get("title") or None,
            emoji=data.get("emoji") or None,
            duration=data.get("duration"),
        )

    def to_record(self) -> dict[str, Any]:
        record = self.text.to_flat("text")
        if self.title:
            record["title"] = self.title
        if self.emoji:
            record["emoji"] = self.emoji
        record["duration"] = self.duration
        return record


class Lesson(BaseModel):
    id: str
    title: LocalizedText
    content: LocalizedText = LocalizedText()
    key_points: LocalizedList = LocalizedList()
    practical_tip: Optional[LocalizedText] = None
    seasonal_advice: Optional[LocalizedText] = None
    slides: list[Slide] = []

    # Display / filtering tags, never validated
    crop_type: Optional[str] = None
    lesson_type: Optional[str] = None
    difficulty: Optional[str] = None
    region: Optional[str] = None
    season: Optional[str] = None

    cached_at: Optional[datetime] = None

    def playback_slides(self) -> list[Slide]:
        """
        Slides to play, in order.

        A lesson without slides plays as one synthetic slide built from its
        title and content.
        """
        if self.slides:
            return list(self.slides)
        return [
            Slide(
                title=self.title.base or None,
                text=self.content,
                emoji=SYNTHETIC_SLIDE_EMOJI,
                duration=SYNTHETIC_SLIDE_SECONDS,
            )
        ]

    def synthetic_slide_title(self, language: str) -> Optional[str]:
        """Localized heading for the synthetic slide of a slide-less lesson."""
        if self.slides:
            return None
        return self.title.resolve(language) or None

    @property
    def total_seconds(self) -> int:
        return sum(slide.duration for slide in self.playback_slides())

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Lesson":
        """Build a lesson from its flat stored/wire record."""
        slides = data.get("slides") or []
        kwargs: dict[str, Any] = {
            "id": str(data["id"]),
            "title": LocalizedText.from_flat(data, "title") or LocalizedText(),
            "content": LocalizedText.from_flat(data, "content") or LocalizedText(),
            "key_points": LocalizedList.from_flat(data, "keyPoints"),
            "practical_tip": LocalizedText.from_flat(data, "practicalTip"),
            "seasonal_advice": LocalizedText.from_flat(data, "seasonalAdvice"),
            "slides": [Slide.from_record(s) for s in slides if isinstance(s, dict)],
            "cached_at": data.get("cachedAt"),
        }
        for key, field in _TAG_KEYS.items():
            value = data.get(key)
            kwargs[field] = str(value) if value else None
        return cls(**kwargs)

    def to_record(self) -> dict[str, Any]:
        """Flatten into the stored/wire record layout."""
        record: dict[str, Any] = {"id": self.id}
        record.update(self.title.to_flat("title"))
        record.update(self.content.to_flat("content"))
        if not self.key_points.is_empty():
            record.update(self.key_points.to_flat("keyPoints"))
        if self.practical_tip is not None:
            record.update(self.practical_tip.to_flat("practicalTip"))
        if self.seasonal_advice is not None:
            record.update(self.seasonal_advice.to_flat("seasonalAdvice"))
        if self.slides:
            record["slides"] = [slide.to_record() for slide in self.slides]
        for key, field in _TAG_KEYS.items():
            value = getattr(self, field)
            if value:
                record[key] = value
        if self.cached_at is not None:
            record["cachedAt"] = self.cached_at.isoformat()
        return record
