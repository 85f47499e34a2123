"""Per-key locking for the strict idempotency mode.

By default the gateway lets concurrent submissions sharing an idempotency
key race (only one record survives, but both may reach the bank). When
idempotency key locking is switched on, submissions for the same key are
serialized through this provider so later ones resolve as duplicates.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

logger = structlog.get_logger(__name__)


class KeyLockProvider:
    """
    In-process asyncio lock per key.

    A lock is created on first use and dropped again once no coroutine
    holds or waits on it, so the registry does not grow with every key ever
    seen. Single-process only.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        """
        Hold the lock for key for the duration of the context.

        Usage:
            async with lock_provider.acquire("idempotency-key"):
                ...
        """
        # No await between lookup and registration, so this is race-free
        # on a single event loop.
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1

        try:
            async with lock:
                logger.debug("key_lock_acquired", key=key)
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
