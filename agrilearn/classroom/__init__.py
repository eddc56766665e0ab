"""
AgriLearn Classroom - Runtime components for offline lessons and playback.

This module provides:
- LessonStore: SQLite key/value persistence
- OfflineCache: Bounded lesson cache and deferred-sync queue
- LessonPlayer: Timed slide playback with narration
- VirtualScheduler: Deterministic timers for playback
- QuizSession: Quiz answering and scoring
- EducationSession: Personalization and request wiring for the UI
"""

from .store import (
    LessonStore,
    DEFAULT_STORE_DB,
    LESSONS_KEY,
    SYNC_QUEUE_KEY,
)

from .offline_cache import (
    OfflineCache,
    MAX_CACHED_LESSONS,
)

from .scheduler import (
    Scheduler,
    TimerHandle,
    VirtualScheduler,
)

from .playback import (
    LessonPlayer,
    PlaybackState,
)

from .connectivity import probe_connectivity

from .quiz_session import QuizSession

from .session import (
    EducationSession,
    ChatMessage,
    Notice,
)

__all__ = [
    # Store
    "LessonStore",
    "DEFAULT_STORE_DB",
    "LESSONS_KEY",
    "SYNC_QUEUE_KEY",
    # Offline cache
    "OfflineCache",
    "MAX_CACHED_LESSONS",
    # Scheduling
    "Scheduler",
    "TimerHandle",
    "VirtualScheduler",
    # Playback
    "LessonPlayer",
    "PlaybackState",
    # Connectivity
    "probe_connectivity",
    # Quiz
    "QuizSession",
    # Session
    "EducationSession",
    "ChatMessage",
    "Notice",
]
