"""Per-key mutual exclusion for in-memory user stores."""

import threading
from contextlib import contextmanager
from typing import Iterator


class KeyedLock:
    """Serializes work per key while different keys proceed in parallel.

    The registry guard is held only while looking up or releasing an entry,
    never while the caller's critical section runs. Entries are dropped as
    soon as no holder or waiter references them.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict[str, list] = {}  # key -> [RLock, refcount]

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.RLock(), 0]
                self._entries[key] = entry
            entry[1] += 1

        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
