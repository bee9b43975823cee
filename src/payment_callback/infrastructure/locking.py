"""Per-payment locking for in-process storage.

This module provides mutual exclusion per payment identifier so that the
load-mutate-save sequence of one callback never interleaves with another
callback for the same payment (e.g. a browser return racing a notification,
or two notification deliveries).
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

logger = structlog.get_logger()


class PaymentLocks:
    """Registry of asyncio locks keyed by payment identifier.

    Locks are created on first use and dropped again once no task holds or
    waits for them, so the registry does not grow with every payment seen.

    Example:
        >>> locks = PaymentLocks()
        >>> async with locks.hold("42"):
        ...     record = await load("42")
        ...     await save(record)
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    async def acquire(self, payment_id: str) -> None:
        """Acquire the lock for a payment, waiting if another task holds it."""
        lock = self._locks.get(payment_id)
        if lock is None:
            lock = self._locks[payment_id] = asyncio.Lock()
        self._users[payment_id] = self._users.get(payment_id, 0) + 1

        if lock.locked():
            logger.debug("lock_already_held", payment_id=payment_id)

        try:
            await lock.acquire()
        except BaseException:
            self._forget(payment_id)
            raise

        logger.debug("lock_acquired", payment_id=payment_id)

    def release(self, payment_id: str) -> None:
        """Release the lock for a payment held by the current task."""
        lock = self._locks.get(payment_id)
        if lock is None or not lock.locked():
            logger.warning("lock_not_found_on_release", payment_id=payment_id)
            return

        lock.release()
        self._forget(payment_id)
        logger.debug("lock_released", payment_id=payment_id)

    @asynccontextmanager
    async def hold(self, payment_id: str) -> AsyncIterator[None]:
        await self.acquire(payment_id)
        try:
            yield
        finally:
            self.release(payment_id)

    def _forget(self, payment_id: str) -> None:
        remaining = self._users.get(payment_id, 1) - 1
        if remaining > 0:
            self._users[payment_id] = remaining
        else:
            self._users.pop(payment_id, None)
            self._locks.pop(payment_id, None)
