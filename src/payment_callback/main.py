"""Main entry point for Payment Callback Service."""

import uvicorn

from payment_callback.config import settings


def main() -> None:
    """Serve the callback API with uvicorn."""
    uvicorn.run(
        "payment_callback.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
