"""Per-record asyncio locks shared by all requests of one process."""

import asyncio
import weakref


class RecordLockRegistry:
    """Hands out one asyncio.Lock per record id.

    Locks are held weakly, so entries disappear once no run is using them.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def lock_for(self, record_id: str) -> asyncio.Lock:
        lock = self._locks.get(record_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[record_id] = lock
        return lock
