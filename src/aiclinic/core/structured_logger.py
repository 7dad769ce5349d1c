"""
Structured logging utilities for the AI Clinic proxy
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import LoggingSettings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process": record.process,
            "thread": record.thread,
        }

        # Add exception info if present
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def configure_logging(settings: "LoggingSettings") -> logging.Logger:
    """Install a single stdout handler on the ``aiclinic`` logger.

    Calling it again replaces the handler, so app reloads and tests do not
    stack duplicate output.
    """
    logger = logging.getLogger("aiclinic")
    logger.setLevel(settings.level)

    handler = logging.StreamHandler(sys.stdout)
    if settings.format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    for existing in list(logger.handlers):
        if getattr(existing, "_aiclinic_handler", False):
            logger.removeHandler(existing)
    handler._aiclinic_handler = True
    logger.addHandler(handler)
    return logger
