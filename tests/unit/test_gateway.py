"""Unit tests for ECommerceGateway."""

from unittest.mock import MagicMock

import pytest
from feedback_helpers import (
    PASSPHRASE,
    PAYMENT_ID,
    notify_request,
    return_request,
    signed_feedback,
    tampered,
)

from payment_callback.config import GatewaySettings
from payment_callback.handlers.gateway import ECommerceGateway
from payment_callback.models import (
    CallbackRequest,
    Decline,
    InvalidResponse,
    LookupFailure,
    PaymentState,
)

COMPLETED_FIELDS = {"STATUS": "9", "PAYID": "12345", "NCERROR": ""}


@pytest.mark.asyncio
class TestECommerceGateway:
    """Test the callback entry points."""

    async def test_notify_completes_payment(self, gateway, repository) -> None:
        record = await gateway.on_notify(notify_request(signed_feedback(COMPLETED_FIELDS)))

        assert record.state == PaymentState.COMPLETED
        assert (await repository.load(PAYMENT_ID)).state == PaymentState.COMPLETED

    async def test_return_only_updates_remote_fields(self, gateway, repository) -> None:
        record = await gateway.on_return(return_request(signed_feedback(COMPLETED_FIELDS)))

        assert record.state == PaymentState.PENDING
        assert record.remote_id == "12345"

    async def test_notify_reads_body_not_query(self, gateway, repository) -> None:
        feedback = signed_feedback(COMPLETED_FIELDS)
        request = CallbackRequest("POST", query_params=feedback.all(), body_params={})

        # Empty body means no PAYMENT_ID to resolve
        with pytest.raises(LookupFailure):
            await gateway.on_notify(request)

        assert (await repository.load(PAYMENT_ID)).state == PaymentState.PENDING

    async def test_notify_decline(self, gateway) -> None:
        feedback = signed_feedback({"STATUS": "0", "NCERROR": "50001111"})

        with pytest.raises(Decline) as exc_info:
            await gateway.on_notify(notify_request(feedback))

        assert exc_info.value.error_code == "50001111"

    async def test_notify_invalid(self, gateway) -> None:
        forged = tampered(signed_feedback(COMPLETED_FIELDS), PAYID="1")

        with pytest.raises(InvalidResponse):
            await gateway.on_notify(notify_request(forged))

    async def test_raw_feedback_logged_when_enabled(self, reconciler) -> None:
        logger = MagicMock()
        gateway = ECommerceGateway(reconciler=reconciler, log_response=True, logger=logger)
        feedback = signed_feedback(COMPLETED_FIELDS)

        await gateway.on_notify(notify_request(feedback))

        logger.debug.assert_called_once()
        assert logger.debug.call_args.args[0] == "ecommerce_notification"
        logged = logger.debug.call_args.kwargs["feedback"]
        assert logged == feedback.all()
        assert "SHASIGN" in logged

    async def test_raw_feedback_logged_on_return(self, reconciler) -> None:
        logger = MagicMock()
        gateway = ECommerceGateway(reconciler=reconciler, log_response=True, logger=logger)

        await gateway.on_return(return_request(signed_feedback(COMPLETED_FIELDS)))

        assert logger.debug.call_args.args[0] == "ecommerce_payment_response"

    async def test_raw_feedback_not_logged_by_default(self, gateway) -> None:
        await gateway.on_notify(notify_request(signed_feedback(COMPLETED_FIELDS)))

        gateway.logger.debug.assert_not_called()

    async def test_cancel_does_not_touch_payment(self, gateway, repository) -> None:
        await gateway.on_cancel(CallbackRequest("GET", {"PAYMENT_ID": PAYMENT_ID}))

        assert (await repository.load(PAYMENT_ID)).state == PaymentState.PENDING
        gateway.logger.info.assert_called_once_with(
            "payment_cancelled_by_buyer",
            gateway="ingenico_ecommerce",
            payment_id=PAYMENT_ID,
        )


@pytest.mark.asyncio
class TestGatewayFromSettings:
    """Test building the pipeline from configuration."""

    async def test_settings_algorithm_and_passphrase_used(self, repository, clock) -> None:
        gateway_settings = GatewaySettings(sha_out=PASSPHRASE, sha_algorithm="sha256")
        gateway = ECommerceGateway.from_settings(gateway_settings, repository, clock=clock)

        record = await gateway.on_notify(
            notify_request(signed_feedback(COMPLETED_FIELDS, algorithm="sha256"))
        )

        assert record.state == PaymentState.COMPLETED

    async def test_settings_algorithm_mismatch_rejected(self, repository, clock) -> None:
        gateway_settings = GatewaySettings(sha_out=PASSPHRASE, sha_algorithm="sha512")
        gateway = ECommerceGateway.from_settings(gateway_settings, repository, clock=clock)

        with pytest.raises(InvalidResponse):
            await gateway.on_notify(
                notify_request(signed_feedback(COMPLETED_FIELDS, algorithm="sha1"))
            )

    async def test_settings_success_statuses_used(self, repository, clock) -> None:
        gateway_settings = GatewaySettings(sha_out=PASSPHRASE, success_statuses=["5", "9", "91"])
        gateway = ECommerceGateway.from_settings(gateway_settings, repository, clock=clock)

        record = await gateway.on_notify(
            notify_request(signed_feedback({"STATUS": "91", "PAYID": "12345"}))
        )

        assert record.state == PaymentState.COMPLETED

    async def test_log_response_flag_from_settings(self, repository) -> None:
        gateway_settings = GatewaySettings(sha_out=PASSPHRASE, log_response=True)

        gateway = ECommerceGateway.from_settings(gateway_settings, repository)

        assert gateway.log_response is True

    async def test_logger_shared_by_every_component(self, repository) -> None:
        logger = MagicMock()
        gateway_settings = GatewaySettings(sha_out=PASSPHRASE)

        gateway = ECommerceGateway.from_settings(gateway_settings, repository, logger=logger)

        reconciler = gateway.reconciler
        assert reconciler.logger is logger
        assert reconciler.verifier.logger is logger
        assert reconciler.state_machine.logger is logger
        assert gateway.extractor.logger is logger
