"""ConcurrencyGate - counting admission control for pipeline runs."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from .schemas import DEFAULT_CONCURRENCY_LIMIT


class ConcurrencyToken:
    """Permit for one pipeline run. Releasing it more than once is a no-op."""

    def __init__(self, gate: "ConcurrencyGate") -> None:
        self._gate: ConcurrencyGate = gate
        self._released: bool = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._gate._release()


class ConcurrencyGate:
    """
    Bounds how many pipeline runs execute at once.

    - acquire() suspends without busy-waiting while `limit` tokens are out
    - acquisition never fails or times out
    - waiters are woken as capacity frees up; ordering is not guaranteed

    Example:
        gate = ConcurrencyGate(limit=50)

        async with gate.admit():
            ...
    """

    def __init__(self, limit: int = DEFAULT_CONCURRENCY_LIMIT):
        if limit < 1:
            raise ValueError(f"Concurrency limit must be at least 1, got {limit}")
        self._limit: int = limit
        self._semaphore: asyncio.Semaphore = asyncio.Semaphore(limit)
        self._in_flight: int = 0
        self._peak: int = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def in_flight(self) -> int:
        """Number of tokens currently held."""
        return self._in_flight

    @property
    def peak(self) -> int:
        """Highest number of tokens held at the same time."""
        return self._peak

    async def acquire(self) -> ConcurrencyToken:
        _ = await self._semaphore.acquire()
        self._in_flight += 1
        self._peak = max(self._peak, self._in_flight)
        return ConcurrencyToken(self)

    @asynccontextmanager
    async def admit(self) -> AsyncIterator[ConcurrencyToken]:
        token = await self.acquire()
        try:
            yield token
        finally:
            token.release()

    def _release(self) -> None:
        self._in_flight -= 1
        self._semaphore.release()
