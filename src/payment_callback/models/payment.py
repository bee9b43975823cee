"""Payment record domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class PaymentState(str, Enum):
    """Local payment state."""

    PENDING = "pending"
    AUTHORIZATION = "authorization"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PaymentRecord:
    """
    A locally tracked payment, owned by the storage collaborator.

    The record is created in PENDING state when the buyer is redirected to
    the processor. The callback pipeline loads it, mutates it in memory and
    hands it back for persistence; it never creates or deletes records.
    """

    payment_id: str
    state: PaymentState = PaymentState.PENDING

    # Last feedback received from the processor, kept for audit/display
    remote_id: str | None = None
    remote_state: str | None = None

    authorized_at: datetime | None = None
    completed_at: datetime | None = None

    # Informational fields set by the collaborator at redirect time
    order_id: str | None = None
    amount_cents: int | None = None
    currency: str | None = None
