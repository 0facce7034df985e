"""Structured logging utilities for the orders API."""
import json
import logging
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Optional

# Correlation IDs follow the request through async handlers
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

CORRELATION_HEADER = "X-Correlation-ID"


def generate_correlation_id() -> str:
    """Generate new correlation ID."""
    return f"CORR_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    """Get the correlation ID bound to the current context, if any."""
    return _correlation_id.get()


class StructuredLogger:
    """JSON logger that stamps each entry with the current correlation ID."""

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)

    def set_correlation_id(self, correlation_id: str):
        """Set correlation ID for current context."""
        _correlation_id.set(correlation_id)

    def clear_correlation_id(self):
        """Clear correlation ID."""
        _correlation_id.set(None)

    def _format_message(self, level: str, message: str, **kwargs) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "logger": self.logger.name,
            "message": message,
            "correlation_id": get_correlation_id() or "none",
        }

        if kwargs:
            log_entry["context"] = kwargs

        # Dates and enums in context are rendered with str()
        return json.dumps(log_entry, default=str)

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message("INFO", message, **kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message("WARNING", message, **kwargs))

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message("ERROR", message, **kwargs))

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message("DEBUG", message, **kwargs))


def get_structured_logger(name: str) -> StructuredLogger:
    """Get or create structured logger."""
    return StructuredLogger(name)
