"""
Logging setup - one predictable format for the app, uvicorn and the ES transport.
Engine diagnostics go to these logs only; API responses carry generic messages.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Loggers that install their own handlers or default to a different level
THIRD_PARTY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "elastic_transport")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging. ``force=True`` replaces handlers set up by uvicorn."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=True)
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(resolved)
    logging.getLogger(__name__).info("Logging configured at %s", logging.getLevelName(resolved))
