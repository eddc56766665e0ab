"""
OfflineCache tests.

Covers the bounded most-recent-first collection, write-through persistence,
recovery from bad persisted state and the deferred-sync queue.
"""

import json
import socket

from agrilearn.classroom import LESSONS_KEY, SYNC_QUEUE_KEY, OfflineCache, probe_connectivity
from agrilearn.schemas import SyncItemType


class TestCacheLesson:
    """Test caching, replacement and eviction."""

    def test_empty_on_fresh_store(self, cache):
        assert cache.cached_lessons == []
        assert cache.sync_queue_size == 0
        assert cache.max_cache_size == 20

    def test_cache_bound_keeps_newest_twenty(self, cache, make_lesson):
        for i in range(25):
            assert cache.cache_lesson(make_lesson(lesson_id=str(i)))

        ids = [lesson.id for lesson in cache.cached_lessons]
        assert ids == [str(i) for i in range(24, 4, -1)]

        persisted = json.loads(cache.store.get(LESSONS_KEY))
        assert [record["id"] for record in persisted] == ids

    def test_recache_replaces_in_place(self, cache, make_lesson):
        cache.cache_lesson(make_lesson(lesson_id="a"))
        cache.cache_lesson(make_lesson(lesson_id="b"))
        cache.cache_lesson(make_lesson(lesson_id="c"))
        first_stamp = cache.get_cached_lesson("b").cached_at

        cache.cache_lesson(make_lesson(lesson_id="b", title="Updated"))

        assert [lesson.id for lesson in cache.cached_lessons] == ["c", "b", "a"]
        updated = cache.get_cached_lesson("b")
        assert updated.title.base == "Updated"
        assert updated.cached_at > first_stamp

    def test_recache_at_limit_does_not_evict(self, cache, make_lesson):
        for i in range(20):
            cache.cache_lesson(make_lesson(lesson_id=str(i)))
        cache.cache_lesson(make_lesson(lesson_id="0"))
        assert len(cache.cached_lessons) == 20
        assert cache.is_cached("0")

    def test_cached_at_stamped(self, cache, make_lesson):
        lesson = make_lesson()
        assert lesson.cached_at is None
        cache.cache_lesson(lesson)
        assert cache.get_cached_lesson(lesson.id).cached_at is not None

    def test_state_reloads_from_store(self, store, clock, make_lesson):
        OfflineCache(store, clock=clock).cache_lesson(make_lesson(lesson_id="42"))
        reloaded = OfflineCache(store)
        assert [lesson.id for lesson in reloaded.cached_lessons] == ["42"]
        assert reloaded.get_cached_lesson("42").title.base == "Tomato Blight Basics"

    def test_write_failure_returns_false_and_keeps_memory_state(self, flaky_store, clock, make_lesson):
        cache = OfflineCache(flaky_store, clock=clock)
        cache.cache_lesson(make_lesson(lesson_id="1"))

        flaky_store.fail_writes = True
        assert cache.cache_lesson(make_lesson(lesson_id="2")) is False

        assert [lesson.id for lesson in cache.cached_lessons] == ["2", "1"]
        persisted = json.loads(flaky_store.get(LESSONS_KEY))
        assert [record["id"] for record in persisted] == ["1"]


class TestRemoveAndClear:
    """Test removal operations."""

    def test_remove_cached_lesson(self, cache, make_lesson):
        cache.cache_lesson(make_lesson(lesson_id="1"))
        cache.cache_lesson(make_lesson(lesson_id="2"))
        cache.remove_cached_lesson("1")
        cache.remove_cached_lesson("missing")
        assert [lesson.id for lesson in cache.cached_lessons] == ["2"]
        assert [r["id"] for r in json.loads(cache.store.get(LESSONS_KEY))] == ["2"]

    def test_clear_cache(self, cache, make_lesson):
        cache.cache_lesson(make_lesson())
        cache.clear_cache()
        assert cache.cached_lessons == []
        assert cache.store.get(LESSONS_KEY) is None


class TestCorruptState:
    """Test recovery from unreadable persisted records."""

    def test_unparsable_lessons_load_empty(self, store):
        store.set(LESSONS_KEY, "{not json")
        assert OfflineCache(store).cached_lessons == []

    def test_wrong_shape_lessons_load_empty(self, store):
        store.set(LESSONS_KEY, json.dumps({"id": "1"}))
        assert OfflineCache(store).cached_lessons == []

    def test_record_missing_id_loads_empty(self, store):
        store.set(LESSONS_KEY, json.dumps([{"title": "no id"}]))
        assert OfflineCache(store).cached_lessons == []

    def test_infinite_slide_duration_loads_with_default(self, store):
        store.set(
            LESSONS_KEY,
            '[{"id": "1", "title": "t", "slides": [{"text": "x", "duration": 1e999}]}]',
        )
        lessons = OfflineCache(store).cached_lessons
        assert [lesson.id for lesson in lessons] == ["1"]
        assert lessons[0].slides[0].duration == 8

    def test_unparsable_queue_loads_empty(self, store):
        store.set(SYNC_QUEUE_KEY, "[{]")
        assert OfflineCache(store).sync_queue == []


class TestSyncQueue:
    """Test the deferred-sync queue."""

    def test_add_persists_queue(self, cache):
        cache.add_to_sync_queue(SyncItemType.LESSON_PROGRESS, {"lessonId": "1"})
        cache.add_to_sync_queue("qa_history", {"question": "Why?"})

        assert cache.sync_queue_size == 2
        persisted = json.loads(cache.store.get(SYNC_QUEUE_KEY))
        assert [item["type"] for item in persisted] == ["lesson_progress", "qa_history"]
        assert persisted[0]["data"] == {"lessonId": "1"}
        assert "timestamp" in persisted[0]

    def test_queue_reloads(self, store):
        OfflineCache(store, is_online=False).add_to_sync_queue("qa_history", {"q": 1})
        assert OfflineCache(store, is_online=False).sync_queue_size == 1

    def test_process_noop_when_offline(self, store):
        cache = OfflineCache(store, is_online=False)
        cache.add_to_sync_queue("lesson_progress", {})
        assert cache.process_sync_queue() == 0
        assert cache.sync_queue_size == 1

    def test_process_noop_when_empty(self, cache):
        assert cache.process_sync_queue() == 0

    def test_process_delivers_batch_and_clears(self, store):
        delivered = []
        cache = OfflineCache(store, sync_handler=delivered.append)
        cache.add_to_sync_queue("lesson_progress", {"lessonId": "1"})
        cache.add_to_sync_queue("qa_history", {"question": "Why?"})

        assert cache.process_sync_queue() == 2
        assert len(delivered) == 1
        assert [item.type for item in delivered[0]] == [
            SyncItemType.LESSON_PROGRESS,
            SyncItemType.QA_HISTORY,
        ]
        assert cache.sync_queue_size == 0
        assert store.get(SYNC_QUEUE_KEY) is None

    def test_failed_handler_keeps_queue(self, store):
        def failing_handler(items):
            raise ConnectionError("server unreachable")

        cache = OfflineCache(store, sync_handler=failing_handler)
        cache.add_to_sync_queue("qa_history", {"question": "Why?"})

        assert cache.process_sync_queue() == 0
        assert cache.sync_queue_size == 1
        assert len(json.loads(store.get(SYNC_QUEUE_KEY))) == 1

    def test_no_handler_discards(self, cache):
        cache.add_to_sync_queue("qa_history", {})
        assert cache.process_sync_queue() == 1
        assert cache.sync_queue_size == 0


class TestConnectivity:
    """Test sync on reconnect."""

    def test_reconnect_drains_exactly_once(self, store):
        batches = []
        cache = OfflineCache(store, is_online=False, sync_handler=batches.append)
        cache.add_to_sync_queue("lesson_progress", {"lessonId": "1"})
        cache.add_to_sync_queue("lesson_progress", {"lessonId": "2"})

        cache.set_online(True)

        assert cache.is_online
        assert len(batches) == 1
        assert len(batches[0]) == 2
        assert cache.sync_queue_size == 0
        assert store.get(SYNC_QUEUE_KEY) is None

    def test_repeated_online_signal_does_not_resync(self, store):
        batches = []
        cache = OfflineCache(store, is_online=True, sync_handler=batches.append)
        cache.set_online(True)
        assert batches == []

    def test_going_offline(self, cache):
        cache.set_online(False)
        assert cache.is_online is False


class TestConnectivityProbe:
    """Test the TCP connectivity probe."""

    def test_reachable_listener(self):
        with socket.socket() as server:
            server.bind(("127.0.0.1", 0))
            server.listen(1)
            port = server.getsockname()[1]
            assert probe_connectivity("127.0.0.1", port, timeout=1.0)

    def test_unreachable_port(self):
        with socket.socket() as server:
            server.bind(("127.0.0.1", 0))
            port = server.getsockname()[1]
        assert not probe_connectivity("127.0.0.1", port, timeout=1.0)
