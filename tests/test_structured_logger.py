"""
JSON log formatting.
"""

import json
import logging
from datetime import datetime

from aiclinic.core.config import LoggingSettings
from aiclinic.core.structured_logger import JSONFormatter, configure_logging


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="aiclinic.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


def test_json_formatter_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "aiclinic.test"
    assert payload["message"] == "hello"
    assert payload["line"] == 10


def test_json_formatter_timestamp_is_utc_aware():
    payload = json.loads(JSONFormatter().format(_record()))
    timestamp = datetime.fromisoformat(payload["timestamp"])
    assert timestamp.utcoffset().total_seconds() == 0


def test_configure_logging_does_not_stack_handlers():
    settings = LoggingSettings(level="debug", format="text")
    configure_logging(settings)
    logger = configure_logging(settings)

    own = [h for h in logger.handlers if getattr(h, "_aiclinic_handler", False)]
    assert len(own) == 1
    assert logger.level == logging.DEBUG
    assert not isinstance(own[0].formatter, JSONFormatter)
