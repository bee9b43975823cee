"""Domain models for Payment Callback Service."""

from payment_callback.models.exceptions import (
    CallbackError,
    Decline,
    InvalidResponse,
    LookupFailure,
    StorageError,
)
from payment_callback.models.feedback import (
    CallbackChannel,
    CallbackRequest,
    ClassifiedOutcome,
    Feedback,
    Outcome,
    SignedResponse,
)
from payment_callback.models.payment import PaymentRecord, PaymentState

__all__ = [
    "CallbackChannel",
    "CallbackError",
    "CallbackRequest",
    "ClassifiedOutcome",
    "Decline",
    "Feedback",
    "InvalidResponse",
    "LookupFailure",
    "Outcome",
    "PaymentRecord",
    "PaymentState",
    "SignedResponse",
    "StorageError",
]
