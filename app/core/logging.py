"""Structured key=value logging for the readiness report service.

Every request handled by the API gets a short request id, carried through
``log_with_context`` so the lines for one report or lead can be grepped
together. Student contact details are masked before they are logged.
"""

import logging
import sys
import uuid
from typing import Any

# Fields emitted before any per-call context, in this order.
BASE_FIELDS = ("timestamp", "level", "module", "function", "message")


def new_request_id() -> str:
    """Short random id tying together the log lines of one request."""
    return uuid.uuid4().hex[:12]


def mask_email(email: str | None) -> str:
    """a***@example.com"""
    if not email or "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"


def mask_phone(phone: str | None) -> str:
    """Last four digits only."""
    digits = "".join(ch for ch in phone or "" if ch.isdigit())
    return f"***{digits[-4:]}" if digits else "***"


def mask_name(name: str | None) -> str:
    """Initials, e.g. "Asha Rao" -> "A.R."."""
    initials = [part[0].upper() for part in (name or "").split() if part]
    return "".join(f"{i}." for i in initials) or "***"


def _format_value(value: Any) -> str:
    text = str(value)
    if not text or any(ch.isspace() or ch in '="' for ch in text):
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n") + '"'
    return text


class StructuredFormatter(logging.Formatter):
    """key=value formatter; values containing spaces, quotes or '=' are quoted."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = dict(
            zip(
                BASE_FIELDS,
                (
                    self.formatTime(record, self.datefmt),
                    record.levelname,
                    record.module,
                    record.funcName,
                    record.getMessage(),
                ),
            )
        )

        request_id = getattr(record, "request_id", None)
        if request_id:
            log_data["request_id"] = request_id

        log_data.update(getattr(record, "extra_data", None) or {})

        line = " ".join(f"{k}={_format_value(v)}" for k, v in log_data.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger writing structured lines to stdout
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        try:
            from app.core.config import get_settings

            dev = get_settings().REPORT_ENV == "dev"
        except Exception:
            # Settings may be invalid at import time; fall back to INFO
            dev = False
        logger.setLevel(logging.DEBUG if dev else logging.INFO)

    return logger


def log_with_context(
    logger: logging.Logger,
    level: int,
    msg: str,
    request_id: str | None = None,
    **fields: Any,
) -> None:
    """
    Log one line with context fields.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        request_id: Id from new_request_id(), emitted right after the message
        **fields: Additional key=value fields (already masked where needed)
    """
    extra: dict[str, Any] = {"extra_data": fields}
    if request_id:
        extra["request_id"] = request_id
    logger.log(level, msg, extra=extra)
