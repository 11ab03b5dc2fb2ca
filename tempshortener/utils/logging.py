"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at application start-up
(e.g. in the interactive shell's `main()`) before any other logging is done.
Library code only creates module-level loggers and never configures handlers.

Logging format:
{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "INFO",
    "logger": "tempshortener.dao.memory.short_link_memory_dao",
    "message": "Short link created.",
    "shortcode": "aZ3kP9qL",
    "event": "LINK_CREATED"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from tempshortener.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'message',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Configure the root logger to emit JSON lines on stderr.

    Args:
        level (str | None):
            Log level name. Defaults to the `LOG_LEVEL` environment variable, or 'INFO'.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, 'INFO')).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stderr': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stderr',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stderr'],
            },
        }
    )
