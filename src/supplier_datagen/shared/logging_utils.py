"""Structured logging utilities for generation runs."""
import json
import logging
import math
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Optional


def _json_default(value: Any) -> Any:
    """Serialize values json.dumps does not know about."""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _sanitize(value: Any) -> Any:
    """Replace NaN floats, which are not valid JSON."""
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {k: _sanitize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize(v) for v in value]
    return value


class StructuredLogger:
    """
    Structured logger with correlation ID support.

    The correlation ID lives in a context variable, so runs executing in
    different threads or tasks each see their own ID.
    """

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)
        self._correlation_id: ContextVar[Optional[str]] = ContextVar(
            f"correlation_id:{logger_name}", default=None
        )

    @property
    def correlation_id(self) -> Optional[str]:
        """Correlation ID of the current context."""
        return self._correlation_id.get()

    def set_correlation_id(self, correlation_id: str):
        """Set correlation ID for current context."""
        self._correlation_id.set(correlation_id)

    def clear_correlation_id(self):
        """Clear correlation ID."""
        self._correlation_id.set(None)

    def _format_message(self, level: str, message: str, **kwargs) -> dict:
        """Format log message with structured data."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            "correlation_id": self.correlation_id or "none",
        }

        if kwargs:
            log_entry["context"] = _sanitize(kwargs)

        return log_entry

    def _emit(self, level: int, level_name: str, message: str, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        entry = self._format_message(level_name, message, **kwargs)
        self.logger.log(level, json.dumps(entry, default=_json_default))

    def info(self, message: str, **kwargs):
        """Log info with structured data."""
        self._emit(logging.INFO, "INFO", message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning with structured data."""
        self._emit(logging.WARNING, "WARNING", message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error with structured data."""
        self._emit(logging.ERROR, "ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug with structured data."""
        self._emit(logging.DEBUG, "DEBUG", message, **kwargs)


def get_structured_logger(name: str) -> StructuredLogger:
    """Get or create structured logger."""
    return StructuredLogger(name)
