import logging
from typing import Any, Optional, TextIO

# Extras rendered after the event, in this order.
LOG_EXTRA_FIELDS = (
    "rel",
    "href",
    "url",
    "type",
    "rels",
    "hops",
    "status",
    "duration_ms",
    "attempt",
)


class LogfmtFormatter(logging.Formatter):
    """logfmt-style formatter for halwire records; missing extras are skipped."""

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info and record.exc_info[0] is not None:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, bool):
            return str(val).lower()
        if isinstance(val, (int, float)):
            return str(val)
        if isinstance(val, (list, tuple)):
            val = ",".join(str(v) for v in val)
        s = str(val)
        if not s or " " in s or "=" in s or '"' in s:
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Route all records through one logfmt handler on the root logger.
    Meant for applications and scripts; the library never calls it itself.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
