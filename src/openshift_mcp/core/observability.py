from __future__ import annotations

import logging
from typing import Any, Dict

# Attributes every LogRecord already owns; passing them in `extra` raises KeyError.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

_DEFAULT_LOGGER = "openshift_mcp.observability"


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if key not in RESERVED_LOG_KEYS}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Log `event` with `fields` attached as record attributes for the logfmt formatter."""
    (logger or logging.getLogger(_DEFAULT_LOGGER)).log(
        level, event, extra=_clean_fields(fields)
    )


__all__ = ["log_event", "RESERVED_LOG_KEYS"]
