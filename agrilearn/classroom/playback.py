"""
LessonPlayer - Slide sequencing for lesson playback.

States:
- IDLE: showing a slide, not auto-advancing
- PLAYING: an auto-advance timer is armed for the current slide
- COMPLETED: the last slide's timer elapsed while playing

Only one auto-advance timer is ever live. Every transition that invalidates
the pending advance cancels its handle before scheduling a new one, and a
generation token makes any callback that slips through a no-op.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from agrilearn.schemas import Lesson, Slide
from agrilearn.voice import Narrator, SilentNarrator

from .scheduler import Scheduler, TimerHandle


logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    COMPLETED = "completed"


class LessonPlayer:
    """
    Play a lesson's slides with per-slide timing and optional narration.

    Callbacks:
        on_slide_change(index): the current slide changed (auto or manual)
        on_complete(): playback ran past the last slide; fires at most once
    """

    def __init__(
        self,
        lesson: Lesson,
        scheduler: Scheduler,
        narrator: Optional[Narrator] = None,
        language: str = "en",
        on_complete: Optional[Callable[[], None]] = None,
        on_slide_change: Optional[Callable[[int], None]] = None,
        voice_enabled: bool = True,
    ):
        self.lesson = lesson
        self.slides: list[Slide] = lesson.playback_slides()
        self.scheduler = scheduler
        self.narrator = narrator or SilentNarrator()
        self.language = language
        self.on_complete = on_complete
        self.on_slide_change = on_slide_change
        self.voice_enabled = voice_enabled

        self.state = PlaybackState.IDLE
        self._index = 0
        self._timer: Optional[TimerHandle] = None
        self._timer_token = 0
        self._completion_signaled = False

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def total_slides(self) -> int:
        return len(self.slides)

    @property
    def last_index(self) -> int:
        return self.total_slides - 1

    @property
    def progress(self) -> float:
        """Percent of the lesson shown, counting the current slide."""
        return (self._index + 1) / self.total_slides * 100

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def is_completed(self) -> bool:
        return self._completion_signaled

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def is_last(self) -> bool:
        return self._index == self.last_index

    @property
    def has_pending_advance(self) -> bool:
        return self._timer is not None and self._timer.active

    @property
    def current_slide(self) -> Slide:
        return self.slides[self._index]

    @property
    def title(self) -> str:
        return self.lesson.title.resolve(self.language)

    @property
    def current_title(self) -> Optional[str]:
        return self.lesson.synthetic_slide_title(self.language) or self.current_slide.title

    @property
    def current_text(self) -> str:
        return self.current_slide.text.resolve(self.language)

    @property
    def show_key_points(self) -> bool:
        """Key points are shown once the last slide is reached."""
        return self.is_last and not self.lesson.key_points.is_empty()

    @property
    def key_points(self) -> list[str]:
        return self.lesson.key_points.resolve(self.language)

    @property
    def practical_tip(self) -> Optional[str]:
        if self.lesson.practical_tip is None:
            return None
        return self.lesson.practical_tip.resolve(self.language) or None

    @property
    def can_narrate(self) -> bool:
        return bool(self.narrator.is_supported)

    @property
    def is_speaking(self) -> bool:
        return self.narrator.is_speaking

    # -------------------------------------------------------------------------
    # Play / pause
    # -------------------------------------------------------------------------

    def toggle_play(self):
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def play(self):
        """Start auto-advancing from the current slide, or from the start once completed."""
        if self.is_playing:
            return
        if self.state == PlaybackState.COMPLETED:
            self._set_index(0)
        self.state = PlaybackState.PLAYING
        self._arm_timer()
        self._narrate_current()

    def pause(self):
        """Stop auto-advancing and narration immediately."""
        if not self.is_playing:
            return
        self._cancel_timer()
        self.narrator.stop()
        self.state = PlaybackState.IDLE

    def close(self):
        """Release the timer and narration when the player is dismissed."""
        self._cancel_timer()
        self.narrator.stop()
        if self.is_playing:
            self.state = PlaybackState.IDLE

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def go_to_slide(self, index: int):
        """
        Jump to a slide, clamped to the valid range.

        Narration stops. Play state is unchanged; while playing, the timer
        restarts for the selected slide and the slide is narrated.
        """
        target = max(0, min(index, self.last_index))
        self.narrator.stop()
        if target == self._index:
            return

        self._set_index(target)
        if self.is_playing:
            self._arm_timer()
            self._narrate_current()
        else:
            self._cancel_timer()

    def next_slide(self):
        self.go_to_slide(self._index + 1)

    def prev_slide(self):
        self.go_to_slide(self._index - 1)

    # -------------------------------------------------------------------------
    # Voice
    # -------------------------------------------------------------------------

    def toggle_voice(self):
        """Stop narration if speaking, otherwise narrate the current slide once."""
        if self.narrator.is_speaking:
            self.narrator.stop()
        elif self.can_narrate:
            self.narrator.speak(self.current_text, self.language)

    def set_language(self, language: str):
        self.language = language

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _set_index(self, index: int):
        self._index = index
        if self.on_slide_change is not None:
            self.on_slide_change(index)

    def _narrate_current(self):
        if self.voice_enabled and self.can_narrate:
            self.narrator.speak(self.current_text, self.language)

    def _arm_timer(self):
        self._cancel_timer()
        self._timer_token += 1
        token = self._timer_token
        self._timer = self.scheduler.call_later(
            self.current_slide.duration,
            lambda: self._on_timer_elapsed(token),
        )

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._timer_token += 1

    def _on_timer_elapsed(self, token: int):
        if token != self._timer_token or not self.is_playing:
            return
        self._timer = None

        if self._index < self.last_index:
            self._set_index(self._index + 1)
            self._arm_timer()
            self._narrate_current()
            return

        self.state = PlaybackState.COMPLETED
        if not self._completion_signaled:
            self._completion_signaled = True
            logger.info(f"Lesson playback complete: {self.lesson.id}")
            if self.on_complete is not None:
                self.on_complete()
