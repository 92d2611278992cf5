#!/usr/bin/env python3
"""Start the famlink API under uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from famlink.config import Settings
from famlink.util.logging import setup_logging
from famlink.util.observability import configure_logfire


def main() -> int:
    """Configure logging, then serve the app until uvicorn exits."""
    settings = Settings()
    setup_logging(settings)

    # Configure Logfire before the app module is imported
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting famlink API",
            port=settings.port,
            expiry_job=settings.invitations.run_expiry_job,
            invitation_expiry_days=settings.invitations.expiry_days,
        )
        uvicorn.run(
            "famlink.interface.api.app:app",
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
