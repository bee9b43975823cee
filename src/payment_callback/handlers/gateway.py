"""Off-site e-Commerce gateway callback handler.

Composes the capabilities (extraction, signature verification, status
classification, state machine) into the two callback entry points the
processor calls: the browser return and the asynchronous notification.
"""

from typing import Any

import structlog

from payment_callback.config import GatewaySettings
from payment_callback.handlers.extractor import FeedbackExtractor
from payment_callback.handlers.reconciler import Clock, PaymentReconciler, utc_now
from payment_callback.infrastructure.repository import PaymentRepository
from payment_callback.models import CallbackChannel, CallbackRequest, Feedback, PaymentRecord
from payment_callback.processors.classifier import ResponseClassifier
from payment_callback.processors.signature import SignatureVerifier
from payment_callback.processors.state_machine import PaymentStateMachine


class ECommerceGateway:
    """Callback entry points for the off-site e-Commerce gateway."""

    gateway_id = "ingenico_ecommerce"

    def __init__(
        self,
        reconciler: PaymentReconciler,
        extractor: FeedbackExtractor | None = None,
        log_response: bool = False,
        logger: Any = None,
    ) -> None:
        self.reconciler = reconciler
        self.extractor = extractor or FeedbackExtractor()
        self.log_response = log_response
        self.logger = logger or structlog.get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        gateway_settings: GatewaySettings,
        repository: PaymentRepository,
        clock: Clock = utc_now,
        logger: Any = None,
    ) -> "ECommerceGateway":
        """Build the full pipeline from gateway settings."""
        reconciler = PaymentReconciler(
            repository=repository,
            verifier=SignatureVerifier.from_passphrase(
                gateway_settings.sha_out,
                gateway_settings.sha_algorithm,
                logger=logger,
            ),
            classifier=ResponseClassifier(
                authorized_status=gateway_settings.authorized_status,
                success_statuses=gateway_settings.success_statuses,
            ),
            state_machine=PaymentStateMachine(logger=logger),
            clock=clock,
            logger=logger,
        )
        return cls(
            reconciler=reconciler,
            extractor=FeedbackExtractor(logger=logger),
            log_response=gateway_settings.log_response,
            logger=logger,
        )

    async def on_return(self, request: CallbackRequest) -> PaymentRecord:
        """
        Handle the buyer's redirect back from the hosted payment page.

        Refreshes the remote id/state only; the local state is driven by the
        notification, which usually arrives before the buyer returns.
        """
        feedback = self._feedback(request, "ecommerce_payment_response")
        return await self.reconciler.reconcile(feedback, CallbackChannel.RETURN)

    async def on_notify(self, request: CallbackRequest) -> PaymentRecord:
        """Handle the processor's server-to-server notification."""
        feedback = self._feedback(request, "ecommerce_notification")
        return await self.reconciler.reconcile(feedback, CallbackChannel.NOTIFY)

    async def on_cancel(self, request: CallbackRequest) -> None:
        """Handle the buyer cancelling on the hosted payment page."""
        feedback = self.extractor.extract(request)
        self.logger.info(
            "payment_cancelled_by_buyer",
            gateway=self.gateway_id,
            payment_id=feedback.payment_id,
        )

    def _feedback(self, request: CallbackRequest, event: str) -> Feedback:
        feedback = self.extractor.extract(request)
        if self.log_response:
            self.logger.debug(event, gateway=self.gateway_id, feedback=feedback.all())
        return feedback
