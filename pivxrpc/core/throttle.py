"""
Concurrency bound for node round trips.

At most ``limit`` requests are awaiting a transport response at any instant.
A slot is held for exactly one round trip; retries re-acquire.
"""

from __future__ import annotations

import asyncio
import itertools
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator


@dataclass(frozen=True, slots=True)
class ThrottleToken:
    """Handle for one held slot."""

    serial: int


class CallThrottle:
    """Semaphore-backed slot pool with in-flight accounting."""

    def __init__(self, limit: int):
        if limit < 1:
            raise ValueError(f"throttle limit must be >= 1, got {limit}")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._serials = itertools.count(1)
        self._held: set[int] = set()
        self._peak = 0

    @property
    def in_flight(self) -> int:
        return len(self._held)

    @property
    def peak(self) -> int:
        """Highest number of simultaneously held slots observed so far."""
        return self._peak

    async def acquire(self) -> ThrottleToken:
        """Block until a slot is free and take it. Cancellation while waiting holds nothing."""
        await self._semaphore.acquire()
        token = ThrottleToken(next(self._serials))
        self._held.add(token.serial)
        self._peak = max(self._peak, len(self._held))
        return token

    def release(self, token: ThrottleToken) -> None:
        """Free the slot held by ``token``; releasing twice is a no-op."""
        if token.serial not in self._held:
            return
        self._held.discard(token.serial)
        self._semaphore.release()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[ThrottleToken]:
        token = await self.acquire()
        try:
            yield token
        finally:
            self.release(token)
