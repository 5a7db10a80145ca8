from __future__ import annotations

import logging
from typing import Any, Dict, Optional

RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(event: str, logger: Optional[logging.Logger] = None, **fields: Any) -> None:
    """
    Emit one INFO record named ``event`` with ``fields`` as record extras.
    Fields that clash with LogRecord attributes are dropped.
    """
    log = logger or logging.getLogger("halwire.observability")
    log.info(event, extra={"event": event, **_clean_fields(fields)})


__all__ = ["RESERVED_LOG_KEYS", "log_event"]
