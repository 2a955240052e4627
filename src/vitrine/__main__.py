"""Entry point for running Vitrine as a module: python -m vitrine"""

import os

import uvicorn

from vitrine.config import settings


def main():
    """Run the Vitrine REST API server."""
    import logging
    import sys

    # Log which port configuration is being used
    port_source = "default (19200)"
    if "PORT" in os.environ:
        port_source = "PORT environment variable"
    elif "VITRINE_PORT" in os.environ:
        port_source = "VITRINE_PORT environment variable"

    print(f"Starting Vitrine on port {settings.port} (from {port_source})")

    # Suppress the stack traces from startup failures
    if not settings.debug:
        logging.getLogger("uvicorn.error").setLevel(logging.CRITICAL)

    try:
        uvicorn.run(
            "vitrine.api.main:app",
            host=settings.host,
            port=settings.port,
            reload=settings.debug,
            log_level=settings.log_level.lower() if settings.debug else "critical",
        )
    except SystemExit:
        sys.exit(1)


if __name__ == "__main__":
    main()
