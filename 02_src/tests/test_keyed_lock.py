"""Tests for KeyedLock."""

import threading
import time

from carebot.keyed_lock import KeyedLock


class TestKeyedLock:
    """Tests for per-key mutual exclusion."""

    def test_entries_released_after_use(self):
        """No registry entry outlives its holders."""
        locks = KeyedLock()

        with locks.hold("user1"):
            assert len(locks) == 1

        assert len(locks) == 0

    def test_reentrant_for_same_thread(self):
        """The same thread can nest holds on one key."""
        locks = KeyedLock()

        with locks.hold("user1"):
            with locks.hold("user1"):
                assert len(locks) == 1

        assert len(locks) == 0

    def test_serializes_same_key(self):
        """Critical sections for one key never overlap."""
        locks = KeyedLock()
        active = []
        overlaps = []

        def worker():
            with locks.hold("room"):
                active.append(1)
                if len(active) > 1:
                    overlaps.append(True)
                time.sleep(0.01)
                active.pop()

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlaps == []
        assert len(locks) == 0

    def test_different_keys_do_not_block(self):
        """A held key does not block another key."""
        locks = KeyedLock()
        entered = threading.Event()

        def other():
            with locks.hold("b"):
                entered.set()

        with locks.hold("a"):
            t = threading.Thread(target=other)
            t.start()
            assert entered.wait(timeout=1)
            t.join()
