# bounds how many generation processes run at once
# one instance lives on app.state; every request borrows a slot for the lifetime of its child process

from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import asyncio


class CapacityExceeded(Exception):
    pass


class ProcessLimiter:
    def __init__(self, *, max_concurrent: int = 8, queue_timeout: float = 30.0) -> None:
        """
        max_concurrent <= 0 disables the cap entirely.
        queue_timeout is how long a request may wait for a free slot; 0 rejects at once.
        """
        self._max = max(0, max_concurrent)
        self._queue_timeout = max(0.0, queue_timeout)
        self._sem: Optional[asyncio.Semaphore] = asyncio.Semaphore(self._max) if self._max else None
        self._active = 0

    @property
    def enabled(self) -> bool:
        return self._sem is not None

    @property
    def active(self) -> int:
        return self._active

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        if self._sem is None:
            self._active += 1
            try:
                yield
            finally:
                self._active -= 1
            return

        if self._queue_timeout <= 0:
            if self._sem.locked():
                raise CapacityExceeded(f"all {self._max} generation slots are busy")
            # a free slot is taken without suspending
            await self._sem.acquire()
        else:
            try:
                await asyncio.wait_for(self._sem.acquire(), timeout=self._queue_timeout)
            except asyncio.TimeoutError:
                raise CapacityExceeded(
                    f"no generation slot freed up within {self._queue_timeout:g}s ({self._max} busy)"
                ) from None

        self._active += 1
        try:
            yield
        finally:
            self._active -= 1
            self._sem.release()
