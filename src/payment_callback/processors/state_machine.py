"""Local payment state machine.

    pending ──► authorization ──► completed
       │              ▲               ▲
       ▼              │               │
    failed ───────────┴───────────────┘

PENDING is set by the storage collaborator at redirect time. A payment that
has reached AUTHORIZATION or COMPLETED is never moved to FAILED, and COMPLETED
never regresses to AUTHORIZATION, so notifications can be applied redundantly
and in any order. FAILED is left by a verified success notification only: the
payment id travels in the buyer's return URL, so a forged notify can mark a
pending payment failed before the processor's genuine one arrives.
"""

from datetime import datetime
from typing import Any

import structlog

from payment_callback.models import PaymentRecord, PaymentState
from payment_callback.processors.base import ReconcilableState


class PaymentStateMachine(ReconcilableState):
    """Default ReconcilableState implementation shared by all gateway variants."""

    def __init__(self, logger: Any = None) -> None:
        self.logger = logger or structlog.get_logger(__name__)

    def update_remote(
        self,
        record: PaymentRecord,
        remote_id: str | None,
        remote_state: str | None,
    ) -> None:
        record.remote_id = remote_id
        record.remote_state = remote_state

    def fail(self, record: PaymentRecord) -> bool:
        if record.state in (PaymentState.PENDING, PaymentState.FAILED):
            record.state = PaymentState.FAILED
            return True

        self._ignored(record, PaymentState.FAILED)
        return False

    def authorize(self, record: PaymentRecord, at: datetime) -> bool:
        if record.state == PaymentState.COMPLETED:
            self._ignored(record, PaymentState.AUTHORIZATION)
            return False

        self._recovered(record, PaymentState.AUTHORIZATION)
        record.state = PaymentState.AUTHORIZATION
        record.authorized_at = at
        return True

    def complete(self, record: PaymentRecord, at: datetime) -> bool:
        self._recovered(record, PaymentState.COMPLETED)
        record.state = PaymentState.COMPLETED
        record.authorized_at = at
        record.completed_at = at
        return True

    def _recovered(self, record: PaymentRecord, requested: PaymentState) -> None:
        if record.state == PaymentState.FAILED:
            self.logger.warning(
                "failed_payment_recovered",
                payment_id=record.payment_id,
                requested_state=requested.value,
            )

    def _ignored(self, record: PaymentRecord, requested: PaymentState) -> None:
        self.logger.warning(
            "transition_ignored",
            payment_id=record.payment_id,
            current_state=record.state.value,
            requested_state=requested.value,
        )
