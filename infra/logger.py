"""
Logging setup shared by every entry point.

Call ``configure_logging()`` once at startup (CLI, demo scripts) and use
``get_logger(__name__)`` everywhere else. Library code never configures
handlers itself.
"""

from __future__ import annotations

import json as _json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .paths import LOG_DIR, STORAGE_DIR

__all__ = ["STORAGE_DIR", "LOG_DIR", "JsonFormatter", "configure_logging", "get_logger"]

ROOT_LOGGER_NAME = "tactics"

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# LogRecord attributes that are not user-supplied ``extra`` fields.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return _json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(
    level: str = "INFO",
    json: bool = False,
    log_file: Optional[str | Path] = None,
) -> None:
    """
    Configure console (and optional file) logging for the project loggers.

    Safe to call more than once: previously installed handlers are replaced.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        json: Emit JSON lines instead of plain text
        log_file: Optional file path; relative paths land under storage/logs
    """
    formatter: logging.Formatter = JsonFormatter() if json else logging.Formatter(_TEXT_FORMAT)

    handlers: list[logging.Handler] = []
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    handlers.append(console)

    if log_file:
        path = Path(log_file)
        if not path.is_absolute():
            path = LOG_DIR / path
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in (ROOT_LOGGER_NAME, "inputs", "game_runner", "main", "__main__"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(level.upper())
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a module logger (thin wrapper to keep call sites uniform)."""
    return logging.getLogger(name)
