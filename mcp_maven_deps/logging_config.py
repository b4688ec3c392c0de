"""Centralized logging configuration.

Guarantees:
- All logs go to stderr; stdout belongs to the stdio MCP transport
- Calling configure_logging repeatedly never stacks handlers
- Human-readable lines by default, one JSON object per line on request
- httpx/httpcore chatter is held at WARNING unless DEBUG is requested
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Final

_HANDLER_NAME: Final[str] = "maven_deps_stderr"
_TEXT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s %(message)s"
_TEXT_DATEFMT: Final[str] = "%Y-%m-%dT%H:%M:%S%z"
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")

# Attributes every LogRecord carries; anything else arrived via extra=
_RESERVED_ATTRS: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys() | {"message", "asctime"}
)


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name or "root",
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # default=str keeps odd extras from breaking the line
        return json.dumps(payload, ensure_ascii=False, default=str)


def _formatter(json_logs: bool) -> logging.Formatter:
    if json_logs:
        return JsonLineFormatter()
    return logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_TEXT_DATEFMT)


def _resolve_level(log_level: str | int | None) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName((log_level or "").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: str | int = "INFO", json_logs: bool = False) -> None:
    """Configure application-wide logging.

    Parameters
    ----------
    log_level: str | int
        Root log level name (e.g. "DEBUG") or numeric level. Unknown names
        fall back to INFO.
    json_logs: bool
        If True, emit one-line JSON per record.
    """
    level = _resolve_level(log_level)
    root = logging.getLogger()

    handler = next((h for h in root.handlers if h.name == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.name = _HANDLER_NAME
        # Drop any stdout stream handler that would corrupt the stdio transport
        for existing in list(root.handlers):
            if getattr(existing, "stream", None) is sys.stdout:
                root.removeHandler(existing)
        root.addHandler(handler)
    handler.setFormatter(_formatter(json_logs))

    root.setLevel(level)

    noisy_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


__all__ = ["configure_logging", "JsonLineFormatter"]
