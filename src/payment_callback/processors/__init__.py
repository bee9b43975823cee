"""
Processor-side building blocks for callback handling.

This module contains the capabilities a gateway handler composes:
- base.CallbackVerifiable / base.ReconcilableState: capability interfaces
- signature.SignatureVerifier: SHA-OUT verification over all parameters
- classifier.ResponseClassifier: status code to outcome mapping
- state_machine.PaymentStateMachine: local payment state transitions
- configuration: line-based locale map and brand list conversion
"""

from payment_callback.processors.base import CallbackVerifiable, ReconcilableState
from payment_callback.processors.classifier import ResponseClassifier
from payment_callback.processors.configuration import (
    BrandOption,
    format_brands,
    format_locale_map,
    parse_brands,
    parse_locale_map,
)
from payment_callback.processors.signature import (
    AllParametersShaComposer,
    HashAlgorithm,
    SignatureVerifier,
)
from payment_callback.processors.state_machine import PaymentStateMachine

__all__ = [
    "AllParametersShaComposer",
    "BrandOption",
    "CallbackVerifiable",
    "HashAlgorithm",
    "PaymentStateMachine",
    "ReconcilableState",
    "ResponseClassifier",
    "SignatureVerifier",
    "format_brands",
    "format_locale_map",
    "parse_brands",
    "parse_locale_map",
]
