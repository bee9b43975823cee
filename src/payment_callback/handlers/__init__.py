"""Callback handlers for the off-site payment gateway."""

from payment_callback.handlers.extractor import FeedbackExtractor
from payment_callback.handlers.gateway import ECommerceGateway
from payment_callback.handlers.reconciler import PaymentReconciler, utc_now

__all__ = ["ECommerceGateway", "FeedbackExtractor", "PaymentReconciler", "utc_now"]
