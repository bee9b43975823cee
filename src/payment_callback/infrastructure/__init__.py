"""Infrastructure layer exports."""

from payment_callback.infrastructure.locking import PaymentLocks
from payment_callback.infrastructure.repository import (
    InMemoryPaymentRepository,
    PaymentRepository,
)

__all__ = [
    "InMemoryPaymentRepository",
    "PaymentLocks",
    "PaymentRepository",
]
