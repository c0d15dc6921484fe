"""Structured logging configuration for LiteBlog.

JSON lines in production, plain text for local work. The request id set by
the request context middleware is attached to every record emitted while a
request is being served.
"""

import contextvars
import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Optional


# Set by request_context middleware, read by the JSON formatter.
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Fields passed through ``extra=`` are merged into the top level, so
    ``logger.info("published", extra={"article_id": 7})`` yields
    ``{"article_id": 7, ...}``.
    """

    _RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = request_id_var.get("")
        if rid:
            payload["request_id"] = rid

        for key, value in record.__dict__.items():
            if key not in self._RESERVED and key not in payload:
                payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Secret redaction
# ---------------------------------------------------------------------------

# Login tokens, verification links, and credential-looking key/value pairs.
_SECRET_PATTERNS = [
    re.compile(r'\b(eyJ[a-zA-Z0-9_\-]+\.)[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+'),  # JWTs
    re.compile(r'(?i)(bearer\s+)[a-zA-Z0-9._\-]{20,}'),
    re.compile(r'(?i)(verify-email\?token=)[a-zA-Z0-9_\-]+'),
    re.compile(
        r'(?i)((?:password|password_hash|secret|token|authorization)["\']?\s*[=:]\s*["\']?)[^\s,\'"]{6,}'
    ),
]

_REDACTED = "***REDACTED***"


def redact(text: str) -> str:
    """Replace anything that looks like a credential with a fixed marker."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + _REDACTED, text)
    return text


class _SecretFilter(logging.Filter):
    """Redact credentials from messages and formatted tracebacks."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        record.msg = redact(str(record.msg))
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure application-wide logging.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL. Defaults to INFO.
        log_format: ``"json"`` for structured output, ``"text"`` for human-readable.
                    Defaults to ``"json"``.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "json").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_SecretFilter())
    if fmt == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Third-party chatter.
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "passlib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured", extra={"level": level, "format": fmt})
