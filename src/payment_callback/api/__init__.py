"""HTTP adapter for Payment Callback Service."""
