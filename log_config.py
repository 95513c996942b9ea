"""Logging configuration with structured output tagged by session and event."""

from __future__ import annotations

import contextvars
import json
import logging
from logging import LogRecord
from typing import Any

# Session of the page run currently being served
_session_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "session_id", default=""
)


def set_session_id(session_id: str) -> None:
    """Set the session ID attached to subsequent log messages."""

    _session_id.set(session_id)


class SessionIdFilter(logging.Filter):
    """Inject the current session ID into log records."""

    def filter(self, record: LogRecord) -> bool:  # type: ignore[override]
        record.session_id = _session_id.get("")
        return True


class JsonFormatter(logging.Formatter):
    """Format log records as structured JSON."""

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        log_dict: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        session_id = getattr(record, "session_id", "")
        if session_id:
            log_dict["session_id"] = session_id
        event_id = getattr(record, "event_id", None)
        if event_id:
            log_dict["event_id"] = event_id
        if record.exc_info:
            log_dict["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_dict)


def configure_logging(log_file: str = "app.log") -> None:
    """Configure root logging with JSON formatting and session IDs.

    This function is idempotent; calling it multiple times will have no effect
    once logging has been configured.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    root_logger.setLevel(logging.INFO)

    formatter = JsonFormatter()
    session_filter = SessionIdFilter()

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)
    file_handler.addFilter(session_filter)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.addFilter(session_filter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(stream_handler)


__all__ = ["configure_logging", "set_session_id"]
