"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Deterministic clock
- A pending payment record and an in-memory repository
- A fully wired reconciler and gateway (loggers are mocks)
"""

from unittest.mock import MagicMock

import pytest
from feedback_helpers import FIXED_NOW, PASSPHRASE, PAYMENT_ID

from payment_callback.handlers.gateway import ECommerceGateway
from payment_callback.handlers.reconciler import PaymentReconciler
from payment_callback.infrastructure.repository import InMemoryPaymentRepository
from payment_callback.models import PaymentRecord, PaymentState
from payment_callback.processors.classifier import ResponseClassifier
from payment_callback.processors.signature import SignatureVerifier


@pytest.fixture
def clock():
    """Clock that always returns FIXED_NOW."""
    return MagicMock(return_value=FIXED_NOW)


@pytest.fixture
def pending_payment():
    return PaymentRecord(
        payment_id=PAYMENT_ID,
        state=PaymentState.PENDING,
        order_id="order_1001",
        amount_cents=2599,
        currency="EUR",
    )


@pytest.fixture
def repository(pending_payment):
    return InMemoryPaymentRepository([pending_payment])


@pytest.fixture
def verifier():
    return SignatureVerifier.from_passphrase(PASSPHRASE, "sha1")


@pytest.fixture
def reconciler(repository, verifier, clock):
    return PaymentReconciler(
        repository=repository,
        verifier=verifier,
        classifier=ResponseClassifier(),
        clock=clock,
        logger=MagicMock(),
    )


@pytest.fixture
def gateway(reconciler):
    return ECommerceGateway(reconciler=reconciler, logger=MagicMock())
