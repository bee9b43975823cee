"""Feedback extraction from inbound callback requests."""

from typing import Any

import structlog

from payment_callback.models import CallbackRequest, Feedback


class FeedbackExtractor:
    """
    Selects the authoritative parameter set of a callback request.

    POST requests (the server-to-server notification) carry the feedback in
    the form body; every other method (the browser return) carries it in
    the query string. The two sets are never merged, and names and values
    are passed through untouched.
    """

    def __init__(self, logger: Any = None) -> None:
        self.logger = logger or structlog.get_logger(__name__)

    def extract(self, request: CallbackRequest) -> Feedback:
        if request.method.upper() == "POST":
            source, params = "body", request.body_params
        else:
            source, params = "query", request.query_params

        feedback = Feedback(params)
        self.logger.debug(
            "feedback_extracted",
            method=request.method,
            source=source,
            field_count=len(feedback),
        )
        return feedback
