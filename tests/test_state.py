"""Tests for the shared application state."""

import threading

import pytest

from gifascii.caching import build_tensor_cache
from gifascii.config import ConverterConfig
from gifascii.error_handling import LockContention
from gifascii.parallel import ParallelConfig
from gifascii.state import AppState, MediaSnapshot


class TestMediaSnapshot:
    def test_default_is_empty(self):
        snapshot = MediaSnapshot()

        assert snapshot.is_empty
        assert snapshot.frame_count == 0
        assert snapshot.dimensions == (0, 0)
        assert snapshot.source_path is None

    def test_reflects_cache(self, frame_factory):
        cache = build_tensor_cache(frame_factory(3, size=(30, 12)))

        snapshot = MediaSnapshot(cache=cache, durations_ms=(40, 40, 40))

        assert snapshot.frame_count == 3
        assert snapshot.dimensions == (30, 12)
        assert not snapshot.is_empty


class TestAppState:
    """Tests for snapshot publication and lock handling."""

    def test_starts_empty(self, state):
        assert state.snapshot().is_empty
        assert state.frame_count == 0

    def test_publish_replaces_whole_snapshot(self, state, frame_factory):
        first = MediaSnapshot(cache=build_tensor_cache(frame_factory(2)))
        second = MediaSnapshot(cache=build_tensor_cache(frame_factory(5)))

        state.publish(first)
        held = state.snapshot()
        state.publish(second)

        assert held is first
        assert held.frame_count == 2
        assert state.snapshot() is second
        assert state.frame_count == 5

    def test_reset(self, state, frame_factory):
        state.publish(MediaSnapshot(cache=build_tensor_cache(frame_factory(2))))

        state.reset()

        assert state.snapshot().is_empty

    def test_default_parallel_config(self):
        state = AppState()
        assert isinstance(state.parallel_config, ParallelConfig)

    def test_lock_contention(self):
        state = AppState(ConverterConfig(LOCK_TIMEOUT_SECONDS=0.05), ParallelConfig(max_workers=1))

        state._lock.acquire()
        try:
            with pytest.raises(LockContention, match="Timed out"):
                state.snapshot()
            with pytest.raises(LockContention):
                state.publish(MediaSnapshot())
        finally:
            state._lock.release()

        assert state.snapshot().is_empty

    def test_concurrent_readers_see_complete_snapshots(self, state, frame_factory):
        snapshots = [
            MediaSnapshot(cache=build_tensor_cache(frame_factory(count, size=(12, 12))))
            for count in (1, 2, 3)
        ]
        errors = []

        def reader():
            for _ in range(200):
                snapshot = state.snapshot()
                tensor = snapshot.cache.get(20)
                if tensor is not None and tensor.frame_count != snapshot.frame_count:
                    errors.append(snapshot)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for index in range(60):
            state.publish(snapshots[index % 3])
        for thread in threads:
            thread.join()

        assert errors == []
