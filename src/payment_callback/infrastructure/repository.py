"""Payment record repository interface and in-memory implementation.

The callback pipeline does not own payment storage. It depends on the
abstract PaymentRepository below; the hosting application provides the real
implementation. InMemoryPaymentRepository backs local development and tests.

Isolation the pipeline relies on:
- ``lock(payment_id)`` gives mutual exclusion per payment identifier for the
  whole load-mutate-save sequence of one callback.
- ``save`` is last-writer-wins for a single record.
- No transaction spans more than one record.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import structlog

from payment_callback.infrastructure.locking import PaymentLocks
from payment_callback.models import PaymentRecord, StorageError

logger = structlog.get_logger()


class PaymentRepository(ABC):
    """Abstract repository for payment record persistence.

    Defines the contract storage collaborators must follow. The pipeline
    depends on this interface, not on concrete implementations.
    """

    @abstractmethod
    async def load(self, payment_id: str) -> PaymentRecord | None:
        """Load a payment record.

        Args:
            payment_id: Identifier echoed back by the processor (PAYMENT_ID)

        Returns:
            The record if found, None otherwise. The returned object may be
            mutated freely by the caller; changes are only persisted by save().
        """
        pass

    @abstractmethod
    async def save(self, record: PaymentRecord) -> None:
        """Persist a payment record.

        Raises:
            StorageError: If the record could not be persisted.
        """
        pass

    @abstractmethod
    def lock(self, payment_id: str) -> AbstractAsyncContextManager[None]:
        """Serialise load-mutate-save sequences for one payment identifier."""
        pass


class InMemoryPaymentRepository(PaymentRepository):
    """Process-local repository keeping copies of records in a dict.

    Records are copied on the way in and out so that in-memory mutations
    only become visible after save(), as with a real store.
    """

    def __init__(self, records: list[PaymentRecord] | None = None) -> None:
        self._records: dict[str, PaymentRecord] = {}
        self._locks = PaymentLocks()
        for record in records or []:
            self._records[record.payment_id] = copy.deepcopy(record)

    async def add(self, record: PaymentRecord) -> None:
        """Register a new payment (done at redirect time by the hosting app)."""
        if record.payment_id in self._records:
            raise StorageError(f"Payment record already exists: {record.payment_id}")
        self._records[record.payment_id] = copy.deepcopy(record)

    async def load(self, payment_id: str) -> PaymentRecord | None:
        record = self._records.get(payment_id)
        return copy.deepcopy(record) if record is not None else None

    async def save(self, record: PaymentRecord) -> None:
        if record.payment_id not in self._records:
            raise StorageError(f"Cannot save unknown payment record: {record.payment_id}")
        self._records[record.payment_id] = copy.deepcopy(record)
        logger.debug(
            "payment_record_saved",
            payment_id=record.payment_id,
            state=record.state.value,
            remote_state=record.remote_state,
        )

    @asynccontextmanager
    async def lock(self, payment_id: str) -> AsyncIterator[None]:
        async with self._locks.hold(payment_id):
            yield
