"""Feedback domain models.

Feedback is the set of fields the processor sends back on either callback
channel. The same structure is used for the browser return and for the
server-to-server notification; only the trust placed in it differs.
"""

import hmac
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

# Field names defined by the processor
PAYMENT_ID_FIELD = "PAYMENT_ID"
REMOTE_ID_FIELD = "PAYID"
STATUS_FIELD = "STATUS"
ERROR_CODE_FIELD = "NCERROR"
SIGNATURE_FIELD = "SHASIGN"


class CallbackChannel(str, Enum):
    """Channel a callback was delivered through."""

    RETURN = "return"
    NOTIFY = "notify"


class Outcome(str, Enum):
    """Closed set of results a callback can be classified into."""

    AUTHORIZED = "authorized"
    COMPLETED = "completed"
    DECLINED = "declined"
    INVALID = "invalid"


@dataclass(frozen=True)
class CallbackRequest:
    """
    Transport-independent description of one inbound callback request.

    Only the parts of the HTTP request the pipeline needs: the method and
    both parameter sets. Exactly one of the parameter sets is authoritative,
    see FeedbackExtractor.
    """

    method: str
    query_params: Mapping[str, str] = field(default_factory=dict)
    body_params: Mapping[str, str] = field(default_factory=dict)


class Feedback(Mapping[str, str]):
    """
    Immutable, ordered mapping of field name to raw string value.

    No field is assumed present: ``feedback.get(name)`` returns None for
    absent fields. Names and values are kept exactly as received.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str] | None = None) -> None:
        self._fields = MappingProxyType(dict(fields or {}))

    def __getitem__(self, name: str) -> str:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Feedback({dict(self._fields)!r})"

    def all(self) -> dict[str, str]:
        """Return a plain dict copy of every field (signature included)."""
        return dict(self._fields)

    @property
    def payment_id(self) -> str | None:
        return self.get(PAYMENT_ID_FIELD)

    @property
    def remote_id(self) -> str | None:
        return self.get(REMOTE_ID_FIELD)

    @property
    def status(self) -> str | None:
        return self.get(STATUS_FIELD)


@dataclass(frozen=True)
class SignedResponse:
    """
    Signature material derived from a Feedback.

    Attributes:
        signing_string: Canonical string the signature is computed over
        supplied_signature: Signature sent by the processor (None if absent)
        computed_signature: Upper-case hex digest computed locally
    """

    signing_string: str
    supplied_signature: str | None
    computed_signature: str

    @property
    def is_valid(self) -> bool:
        """Case-insensitive, constant-time comparison of the two signatures."""
        if not self.supplied_signature:
            return False
        return hmac.compare_digest(
            self.computed_signature.upper().encode("utf-8"),
            self.supplied_signature.upper().encode("utf-8"),
        )


@dataclass(frozen=True)
class ClassifiedOutcome:
    """
    Result of classifying one feedback.

    error_code is populated on DECLINED only, and only when the processor
    sent a non-empty error code.
    """

    outcome: Outcome
    status: str | None = None
    remote_id: str | None = None
    error_code: str | None = None

    @classmethod
    def invalid(cls, feedback: Feedback) -> "ClassifiedOutcome":
        """Outcome for feedback whose signature failed verification."""
        return cls(
            outcome=Outcome.INVALID,
            status=feedback.status,
            remote_id=feedback.remote_id,
        )

    @property
    def is_success(self) -> bool:
        return self.outcome in (Outcome.AUTHORIZED, Outcome.COMPLETED)
