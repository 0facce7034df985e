"""Logging configuration for the order data generator service."""
import logging
import sys

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_structured_logging(level: str = "INFO", json_messages: bool = True):
    """
    Configure root logging for the application.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_messages: Emit bare messages, for loggers that already format JSON
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s" if json_messages else PLAIN_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Request logging is handled by our middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
