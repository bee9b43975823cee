"""Custom exceptions for Payment Callback Service."""


class CallbackError(Exception):
    """Base exception for callback processing errors."""

    pass


class LookupFailure(CallbackError):
    """
    Raised when the feedback's payment identifier does not resolve to a record.

    This is a TERMINAL error for the request. No record has been mutated,
    because there is no record to mutate.
    """

    def __init__(self, payment_id: str | None) -> None:
        self.payment_id = payment_id
        super().__init__(f"Payment record not found: {payment_id!r}")


class InvalidResponse(CallbackError):
    """
    Raised when the feedback signature does not validate.

    The record has already been updated (remote fields always, local state
    on the notify channel) by the time this is raised, so the rejected
    callback leaves an auditable trail.
    """

    def __init__(self, payment_id: str, message: str = "The gateway response looks suspicious.") -> None:
        self.payment_id = payment_id
        super().__init__(message)


class Decline(CallbackError):
    """
    Raised when the processor reports a non-success status.

    Carries the processor error code (NCERROR) for observability. The record
    is marked failed (notify channel) before this is raised.
    """

    def __init__(self, payment_id: str, error_code: str | None = None) -> None:
        self.payment_id = payment_id
        self.error_code = error_code
        super().__init__(f"Payment has been declined by the gateway ({error_code or ''}).")


class StorageError(CallbackError):
    """
    Raised by a payment repository when persisting a record fails.

    Propagated unchanged; the service never retries. On the notify channel
    the processor redelivers the callback.
    """

    pass
