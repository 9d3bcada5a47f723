import logging
import os
from typing import Any, Iterable, Optional, TextIO

LOG_EXTRA_FIELDS = (
    "operation",
    "method",
    "endpoint",
    "status",
    "duration_ms",
    "attempt",
    "error_type",
    "resource",
    "host",
    "outcome",
    "attempts",
    "tool",
)

# httpx logs every request at INFO; op_call already covers that.
_NOISY_LOGGERS = ("httpx", "httpcore")


class LogfmtFormatter(logging.Formatter):
    """logfmt lines: level, logger, event, then whichever known extras are set."""

    def __init__(self, fields: Iterable[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        pairs = [("level", record.levelname.lower()), ("logger", record.name)]

        message = record.getMessage()
        if message:
            pairs.append(("event", message))

        pairs.extend(
            (key, getattr(record, key))
            for key in self.fields
            if getattr(record, key, None) is not None
        )

        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))

        return " ".join(f"{key}={self._quote(value)}" for key, value in pairs)

    @staticmethod
    def _quote(value: Any) -> str:
        if isinstance(value, (bool, int, float)):
            return str(value)
        text = str(value)
        if not text or any(c in text for c in ' ="'):
            return '"' + text.replace('"', '\\"') + '"'
        return text


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """
    Route root logging through LogfmtFormatter.
    level defaults to OPENSHIFT_LOG_LEVEL, then INFO. Safe to call twice.
    """
    level = (level or os.getenv("OPENSHIFT_LOG_LEVEL") or "INFO").upper()

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
