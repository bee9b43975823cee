"""FastAPI application entry point for Payment Callback Service."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from payment_callback.api.routes import router
from payment_callback.config import Settings, settings
from payment_callback.handlers.gateway import ECommerceGateway
from payment_callback.handlers.reconciler import Clock, utc_now
from payment_callback.infrastructure.repository import InMemoryPaymentRepository, PaymentRepository
from payment_callback.logging_config import configure_logging, get_logger

# Configure logging at module level
configure_logging(
    log_level=settings.log_level,
    format_as_json=settings.environment != "development",
)

logger = get_logger(__name__)


def create_app(
    app_settings: Settings | None = None,
    repository: PaymentRepository | None = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """Create the application.

    Args:
        app_settings: Settings to use (defaults to the global settings)
        repository: Payment storage collaborator. Defaults to an in-memory
            repository, which is only suitable for local development.
        clock: Time source for authorization/completion timestamps
    """
    app_settings = app_settings or settings
    repository = repository or InMemoryPaymentRepository()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "starting_payment_callback_service",
            environment=app_settings.environment,
            sha_algorithm=app_settings.gateway.sha_algorithm.value,
            repository=type(repository).__name__,
        )
        if not app_settings.gateway.sha_out:
            logger.warning("sha_out_passphrase_not_configured")

        yield

        logger.info("payment_callback_service_shutdown_complete")

    app = FastAPI(
        title="Payment Callback Service",
        description="Verification and reconciliation of off-site payment callbacks",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.repository = repository
    app.state.gateway = ECommerceGateway.from_settings(
        app_settings.gateway,
        repository,
        clock=clock,
    )
    app.include_router(router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": app_settings.service_name,
            "environment": app_settings.environment,
        }

    return app


app = create_app()
