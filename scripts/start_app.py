#!/usr/bin/env python3
"""Start the remark API under uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from remark.config import Settings
from remark.util.logging import setup_logging
from remark.util.observability import configure_logfire


def main() -> int:
    """Configure logging, then serve the app until shutdown."""
    settings = Settings()

    # Configure before the app module is imported so startup errors are traced
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting remark API",
            host=settings.host,
            port=settings.port,
            environment=settings.environment,
        )
        uvicorn.run(
            "remark.interface.api.app:app",
            host=settings.host,
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
        raise


if __name__ == "__main__":
    sys.exit(main())
