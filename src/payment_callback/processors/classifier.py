"""Classification of processor status codes."""

from collections.abc import Iterable, Mapping

from payment_callback.models import ClassifiedOutcome, Outcome
from payment_callback.models.feedback import ERROR_CODE_FIELD, REMOTE_ID_FIELD, STATUS_FIELD

# Processor status codes
STATUS_AUTHORISED = "5"
STATUS_PAYMENT_REQUESTED = "9"

DEFAULT_SUCCESS_STATUSES = frozenset({STATUS_AUTHORISED, STATUS_PAYMENT_REQUESTED})


class ResponseClassifier:
    """
    Maps a verified feedback onto a closed outcome.

    Only call this on feedback that passed signature verification; the
    reconciler produces Outcome.INVALID itself for feedback that did not.
    """

    def __init__(
        self,
        authorized_status: str = STATUS_AUTHORISED,
        success_statuses: Iterable[str] = DEFAULT_SUCCESS_STATUSES,
    ) -> None:
        self.authorized_status = authorized_status
        self.success_statuses = frozenset(success_statuses)

    def classify(self, feedback: Mapping[str, str]) -> ClassifiedOutcome:
        """
        Classify a feedback by its STATUS field.

        Args:
            feedback: Verified feedback fields

        Returns:
            AUTHORIZED for the authorised sentinel, COMPLETED for any other
            success status, DECLINED otherwise. A missing status is DECLINED
            with no error code.
        """
        status = feedback.get(STATUS_FIELD)
        remote_id = feedback.get(REMOTE_ID_FIELD)

        if status is not None and status == self.authorized_status:
            return ClassifiedOutcome(Outcome.AUTHORIZED, status=status, remote_id=remote_id)

        if status is not None and status in self.success_statuses:
            return ClassifiedOutcome(Outcome.COMPLETED, status=status, remote_id=remote_id)

        return ClassifiedOutcome(
            Outcome.DECLINED,
            status=status,
            remote_id=remote_id,
            error_code=feedback.get(ERROR_CODE_FIELD) or None,
        )
