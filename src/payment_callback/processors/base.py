"""Capability interfaces composed by processor-variant callback handlers."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime

from payment_callback.models import PaymentRecord, SignedResponse


class CallbackVerifiable(ABC):
    """
    Capability: prove a feedback originated from the processor.

    Implementations hold the shared secret and hash algorithm. A handler
    for any processor variant composes one of these rather than inheriting
    signature logic.
    """

    @abstractmethod
    def sign(self, feedback: Mapping[str, str]) -> SignedResponse:
        """
        Build the signature material for a feedback.

        Args:
            feedback: Raw feedback fields as received

        Returns:
            SignedResponse holding the canonical signing string, the supplied
            signature and the locally computed one.
        """
        pass

    def verify(self, feedback: Mapping[str, str]) -> bool:
        """Return True only if the supplied signature matches exactly."""
        return self.sign(feedback).is_valid


class ReconcilableState(ABC):
    """
    Capability: the local payment state machine.

    Every transition mutates the record in memory only and returns whether
    the local state was actually applied. Persistence is the caller's job.
    Transitions must be safe to apply redundantly and in any order.
    """

    @abstractmethod
    def update_remote(
        self,
        record: PaymentRecord,
        remote_id: str | None,
        remote_state: str | None,
    ) -> None:
        """Record the processor's view of the payment (always applied)."""
        pass

    @abstractmethod
    def fail(self, record: PaymentRecord) -> bool:
        """Move the payment to FAILED if it has not succeeded yet."""
        pass

    @abstractmethod
    def authorize(self, record: PaymentRecord, at: datetime) -> bool:
        """Move the payment to AUTHORIZATION unless it is already COMPLETED."""
        pass

    @abstractmethod
    def complete(self, record: PaymentRecord, at: datetime) -> bool:
        """Move the payment to COMPLETED from any state."""
        pass
