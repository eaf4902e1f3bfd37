#!/usr/bin/env python3
"""Start the booking API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from booking.config import Settings
from booking.util.logging import setup_logging
from booking.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting mentor booking API",
            environment=settings.environment,
            conditional_writes=settings.booking.conditional_writes,
        )

        # The app module is imported by uvicorn after Logfire is configured
        uvicorn.run(
            "booking.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
