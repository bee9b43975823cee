"""
Reconciliation of callback feedback against the local payment record.

This module implements the workflow shared by both callback channels:
- Payment record lookup
- Audit update of the processor's remote id/state
- Signature verification
- Status classification
- Local state transition (notification channel only)

Only the notify channel drives the local state machine. The browser return
may arrive before or after the notification, may be replayed, or may never
arrive at all, so it only refreshes the remote fields.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import structlog

from payment_callback.infrastructure.repository import PaymentRepository
from payment_callback.models import (
    CallbackChannel,
    ClassifiedOutcome,
    Decline,
    Feedback,
    InvalidResponse,
    LookupFailure,
    Outcome,
    PaymentRecord,
)
from payment_callback.processors.base import CallbackVerifiable, ReconcilableState
from payment_callback.processors.classifier import ResponseClassifier
from payment_callback.processors.state_machine import PaymentStateMachine

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PaymentReconciler:
    """Idempotent reconciliation of one feedback event against its payment."""

    def __init__(
        self,
        repository: PaymentRepository,
        verifier: CallbackVerifiable,
        classifier: ResponseClassifier,
        state_machine: ReconcilableState | None = None,
        clock: Clock = utc_now,
        logger: Any = None,
    ) -> None:
        self.repository = repository
        self.verifier = verifier
        self.classifier = classifier
        self.logger = logger or structlog.get_logger(__name__)
        self.state_machine = state_machine or PaymentStateMachine(logger=self.logger)
        self.clock = clock

    async def reconcile(self, feedback: Feedback, channel: CallbackChannel) -> PaymentRecord:
        """
        Process one feedback for its payment record.

        Workflow:
        1. Resolve PAYMENT_ID to a record
        2. Record remote id/state and save (before verification, so forged
           callbacks leave an audit trail)
        3. Verify the signature
        4. Classify the status
        5. Advance the local state (notify only) and save

        Args:
            feedback: Raw feedback extracted from the request
            channel: Channel the feedback was delivered through

        Returns:
            The payment record as persisted.

        Raises:
            LookupFailure: PAYMENT_ID missing or unknown (no mutation)
            InvalidResponse: Signature mismatch (record already saved)
            Decline: Non-success status (record already saved)
            StorageError: Persisting the record failed (propagated unchanged)
        """
        payment_id = feedback.payment_id
        if not payment_id:
            self.logger.error("payment_id_missing", channel=channel.value)
            raise LookupFailure(payment_id)

        async with self.repository.lock(payment_id):
            record = await self.repository.load(payment_id)
            if record is None:
                self.logger.error(
                    "payment_record_not_found",
                    payment_id=payment_id,
                    channel=channel.value,
                )
                raise LookupFailure(payment_id)

            self.state_machine.update_remote(record, feedback.remote_id, feedback.status)
            await self.repository.save(record)

            if not self.verifier.verify(feedback):
                outcome = ClassifiedOutcome.invalid(feedback)
                self.logger.warning(
                    "feedback_rejected",
                    payment_id=payment_id,
                    channel=channel.value,
                    outcome=outcome.outcome.value,
                    status=outcome.status,
                )
                await self._fail(record, channel)
                raise InvalidResponse(payment_id)

            outcome = self.classifier.classify(feedback)
            if outcome.outcome == Outcome.DECLINED:
                self.logger.warning(
                    "payment_declined",
                    payment_id=payment_id,
                    channel=channel.value,
                    status=outcome.status,
                    error_code=outcome.error_code,
                )
                await self._fail(record, channel)
                raise Decline(payment_id, outcome.error_code)

            if channel == CallbackChannel.NOTIFY:
                await self._advance(record, outcome)

            self.logger.info(
                "callback_reconciled",
                payment_id=payment_id,
                channel=channel.value,
                outcome=outcome.outcome.value,
                remote_id=record.remote_id,
                state=record.state.value,
            )
            return record

    async def _fail(self, record: PaymentRecord, channel: CallbackChannel) -> None:
        if channel != CallbackChannel.NOTIFY:
            return
        if self.state_machine.fail(record):
            await self.repository.save(record)

    async def _advance(self, record: PaymentRecord, outcome: ClassifiedOutcome) -> None:
        now = self.clock()
        if outcome.outcome == Outcome.AUTHORIZED:
            applied = self.state_machine.authorize(record, now)
        else:
            applied = self.state_machine.complete(record, now)

        if applied:
            await self.repository.save(record)
        else:
            self.logger.info(
                "notification_superseded",
                payment_id=record.payment_id,
                outcome=outcome.outcome.value,
                state=record.state.value,
            )
