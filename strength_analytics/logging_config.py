"""
Logging configuration.

One stdout handler on the root logger: plain text by default, one JSON
object per line with LOG_FORMAT=json.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from . import config

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """Timestamp, level, logger and message as a JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ServiceLogHandler(logging.StreamHandler):
    """The stdout handler installed by setup_logging"""


def setup_logging(level: str = None, log_format: str = None) -> logging.Logger:
    """
    Configure the root logger for the service.

    Safe to call more than once: only a handler installed by a previous
    call is replaced, handlers added by anything else are left alone.

    Args:
        level: Log level name (defaults to LOG_LEVEL)
        log_format: 'text' or 'json' (defaults to LOG_FORMAT)
    """
    log_level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)

    if (log_format or config.LOG_FORMAT) == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        if isinstance(handler, ServiceLogHandler):
            root_logger.removeHandler(handler)

    handler = ServiceLogHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return root_logger
