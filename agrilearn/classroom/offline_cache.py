"""
OfflineCache - Lessons available without network access.

Wraps LessonStore with:
- A bounded, most-recent-first lesson collection (MAX_CACHED_LESSONS)
- Online/offline state driven by the host's connectivity signal
- A deferred-sync queue drained when connectivity returns

Every mutation writes through to the store before returning.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from agrilearn.schemas import Lesson, SyncItemType, SyncQueueItem

from .store import LESSONS_KEY, SYNC_QUEUE_KEY, LessonStore


logger = logging.getLogger(__name__)

MAX_CACHED_LESSONS = 20

SyncHandler = Callable[[list[SyncQueueItem]], None]

_LOAD_ERRORS = (sqlite3.Error, ValueError, KeyError, TypeError, OverflowError)
_SAVE_ERRORS = (sqlite3.Error, ValueError, TypeError)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OfflineCache:
    """
    Single source of truth for cached lessons and deferred actions.

    Construct once per session and pass it to whatever needs it.
    """

    max_cache_size = MAX_CACHED_LESSONS

    def __init__(
        self,
        store: LessonStore,
        is_online: bool = True,
        sync_handler: Optional[SyncHandler] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the cache and load persisted state.

        Args:
            store: Durable record store
            is_online: Connectivity at construction time
            sync_handler: Receives the queued items when the queue drains.
                Without one, drained items are discarded.
            clock: Source of timestamps for cachedAt and queue items
        """
        self.store = store
        self.sync_handler = sync_handler
        self._clock = clock
        self._is_online = is_online
        self._lessons: list[Lesson] = self._load_lessons()
        self._sync_queue: list[SyncQueueItem] = self._load_sync_queue()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _load_lessons(self) -> list[Lesson]:
        try:
            raw = self.store.get(LESSONS_KEY)
            if not raw:
                return []
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError("lesson cache record is not a list")
            lessons = [Lesson.from_record(record) for record in records]
        except _LOAD_ERRORS as e:
            logger.error(f"Error loading lesson cache, starting empty: {e}")
            return []
        logger.info(f"Loaded {len(lessons)} cached lessons")
        return lessons[:self.max_cache_size]

    def _load_sync_queue(self) -> list[SyncQueueItem]:
        try:
            raw = self.store.get(SYNC_QUEUE_KEY)
            if not raw:
                return []
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("sync queue record is not a list")
            return [SyncQueueItem.model_validate(item) for item in items]
        except _LOAD_ERRORS as e:
            logger.error(f"Error loading sync queue, starting empty: {e}")
            return []

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_online(self) -> bool:
        return self._is_online

    @property
    def cached_lessons(self) -> list[Lesson]:
        """Cached lessons, most recently cached first."""
        return list(self._lessons)

    @property
    def sync_queue(self) -> list[SyncQueueItem]:
        return list(self._sync_queue)

    @property
    def sync_queue_size(self) -> int:
        return len(self._sync_queue)

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    def cache_lesson(self, lesson: Lesson) -> bool:
        """
        Store a lesson for offline use.

        An existing id is replaced in place; a new id goes to the front and
        the oldest entries beyond MAX_CACHED_LESSONS are dropped.

        Returns:
            False if the durable write failed. The in-memory collection keeps
            the new state either way.
        """
        stamped = lesson.model_copy(update={"cached_at": self._clock()})

        position = self._index_of(lesson.id)
        if position is not None:
            updated = list(self._lessons)
            updated[position] = stamped
        else:
            updated = [stamped, *self._lessons]
            if len(updated) > self.max_cache_size:
                evicted = updated[self.max_cache_size:]
                updated = updated[:self.max_cache_size]
                logger.info(f"Evicted {len(evicted)} oldest cached lessons")

        self._lessons = updated

        try:
            self._save_lessons()
        except _SAVE_ERRORS as e:
            logger.error(f"Error caching lesson {lesson.id}: {e}")
            return False

        logger.info(f"Lesson cached: {lesson.title.base}")
        return True

    def get_cached_lesson(self, lesson_id: str) -> Optional[Lesson]:
        position = self._index_of(lesson_id)
        return self._lessons[position] if position is not None else None

    def is_cached(self, lesson_id: str) -> bool:
        return self._index_of(lesson_id) is not None

    def remove_cached_lesson(self, lesson_id: str):
        """Remove a lesson by id; unknown ids are ignored."""
        self._lessons = [lesson for lesson in self._lessons if lesson.id != lesson_id]
        try:
            self._save_lessons()
        except _SAVE_ERRORS as e:
            logger.error(f"Error removing cached lesson {lesson_id}: {e}")

    def clear_cache(self):
        """Drop every cached lesson and the persisted record."""
        self._lessons = []
        try:
            self.store.delete(LESSONS_KEY)
        except sqlite3.Error as e:
            logger.error(f"Error clearing lesson cache: {e}")

    def _index_of(self, lesson_id: str) -> Optional[int]:
        for idx, lesson in enumerate(self._lessons):
            if lesson.id == lesson_id:
                return idx
        return None

    def _save_lessons(self):
        payload = json.dumps(
            [lesson.to_record() for lesson in self._lessons],
            ensure_ascii=False,
        )
        self.store.set(LESSONS_KEY, payload)

    # -------------------------------------------------------------------------
    # Sync queue
    # -------------------------------------------------------------------------

    def add_to_sync_queue(self, item_type: SyncItemType | str, data: dict[str, Any]):
        """Append an action to the sync queue and persist the whole queue."""
        item = SyncQueueItem(
            type=SyncItemType(item_type),
            data=data,
            timestamp=self._clock(),
        )
        self._sync_queue = [*self._sync_queue, item]
        try:
            self._save_sync_queue()
        except _SAVE_ERRORS as e:
            logger.error(f"Error persisting sync queue: {e}")

    def process_sync_queue(self) -> int:
        """
        Drain the sync queue.

        Does nothing while offline or when the queue is empty. The queued
        items go to the sync handler as one batch; if the handler raises,
        the queue is kept for the next attempt.

        Returns:
            Number of items drained
        """
        if not self._is_online or not self._sync_queue:
            return 0

        items = list(self._sync_queue)
        logger.info(f"Processing sync queue: {len(items)} items")

        if self.sync_handler is None:
            logger.warning(f"No sync handler configured, discarding {len(items)} queued items")
        else:
            try:
                self.sync_handler(items)
            except Exception as e:
                logger.error(f"Sync failed, keeping {len(items)} queued items: {e}")
                return 0

        self._sync_queue = []
        try:
            self.store.delete(SYNC_QUEUE_KEY)
        except sqlite3.Error as e:
            logger.error(f"Error clearing persisted sync queue: {e}")
        return len(items)

    def _save_sync_queue(self):
        payload = json.dumps(
            [item.model_dump(mode="json") for item in self._sync_queue],
            ensure_ascii=False,
        )
        self.store.set(SYNC_QUEUE_KEY, payload)

    # -------------------------------------------------------------------------
    # Connectivity
    # -------------------------------------------------------------------------

    def set_online(self, online: bool):
        """
        Apply a connectivity signal from the host.

        Going from offline to online drains the sync queue once.
        """
        was_online = self._is_online
        self._is_online = online
        if online and not was_online:
            logger.info("Connectivity restored")
            self.process_sync_queue()
        elif was_online and not online:
            logger.info("Connectivity lost, working offline")
