"""SHA-OUT signature composition and verification.

The processor signs every feedback it sends with a digest computed over all
of its (non-empty) parameters and a passphrase shared with the merchant:

    received:           orderID=1001, NCERROR=, PAYID=12345, STATUS=9
    signing string:     ORDERID=1001<passphrase>PAYID=12345<passphrase>STATUS=9<passphrase>
    signature:          upper(hex(SHA-x(signing string)))

Parameter names are upper-cased and then sorted before concatenation, so the
signature depends neither on the order the fields arrived in nor on the
mixed-case names the processor uses for some of them (orderID, amount, ...).
Values are signed exactly as received.
"""

import hashlib
from collections.abc import Mapping
from enum import Enum
from typing import Any

import structlog

from payment_callback.models import SignedResponse
from payment_callback.models.feedback import SIGNATURE_FIELD
from payment_callback.processors.base import CallbackVerifiable


class HashAlgorithm(str, Enum):
    """Digest algorithms supported by the processor for SHA-OUT."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    def hexdigest(self, data: str) -> str:
        """Upper-case hex digest of a UTF-8 encoded string."""
        return hashlib.new(self.value, data.encode("utf-8")).hexdigest().upper()


class AllParametersShaComposer:
    """
    Composes the signature over all parameters of a feedback.

    "All parameters" mode: every field except the signature itself is
    signed under its upper-cased name. Fields with an empty value are
    skipped, matching the processor.
    """

    def __init__(
        self,
        passphrase: str,
        algorithm: HashAlgorithm | str = HashAlgorithm.SHA1,
        signature_field: str = SIGNATURE_FIELD,
    ) -> None:
        self.passphrase = passphrase
        self.algorithm = HashAlgorithm(algorithm)
        self.signature_field = signature_field

    def signing_string(self, feedback: Mapping[str, str]) -> str:
        excluded = self.signature_field.upper()
        signed = sorted(
            (name.upper(), value)
            for name, value in feedback.items()
            if name.upper() != excluded and value != ""
        )
        return "".join(f"{name}={value}{self.passphrase}" for name, value in signed)

    def compose(self, feedback: Mapping[str, str]) -> str:
        return self.algorithm.hexdigest(self.signing_string(feedback))


class SignatureVerifier(CallbackVerifiable):
    """
    Verifies the processor's signature on a feedback.

    Any mismatch is a hard failure; a missing signature never validates.
    """

    def __init__(self, composer: AllParametersShaComposer, logger: Any = None) -> None:
        self.composer = composer
        self.logger = logger or structlog.get_logger(__name__)

    @classmethod
    def from_passphrase(
        cls,
        passphrase: str,
        algorithm: HashAlgorithm | str = HashAlgorithm.SHA1,
        logger: Any = None,
    ) -> "SignatureVerifier":
        return cls(AllParametersShaComposer(passphrase, algorithm), logger=logger)

    def sign(self, feedback: Mapping[str, str]) -> SignedResponse:
        signing_string = self.composer.signing_string(feedback)
        return SignedResponse(
            signing_string=signing_string,
            supplied_signature=self._supplied_signature(feedback),
            computed_signature=self.composer.algorithm.hexdigest(signing_string),
        )

    def verify(self, feedback: Mapping[str, str]) -> bool:
        signed = self.sign(feedback)
        if not signed.is_valid:
            self.logger.warning(
                "signature_mismatch",
                algorithm=self.composer.algorithm.value,
                supplied_signature=signed.supplied_signature,
            )
            return False
        return True

    def _supplied_signature(self, feedback: Mapping[str, str]) -> str | None:
        # The processor sends SHASIGN upper-case, but the name is not case-sensitive
        wanted = self.composer.signature_field.upper()
        for name, value in feedback.items():
            if name.upper() == wanted:
                return value
        return None
