"""Payment Callback Service: verification and reconciliation of off-site payment callbacks."""
