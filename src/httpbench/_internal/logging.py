"""Logging setup for httpbench.

Worker threads log through child loggers of ``httpbench``; every record
carries the thread name so failures can be traced back to a worker.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

_TEXT_FORMAT = "%(asctime)s [%(levelname)-8s] %(threadName)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _JsonFormatter(logging.Formatter):
    """One-line JSON log formatter.

    Emits objects with keys: timestamp, level, logger, thread, message, and
    ``worker_id`` / ``operation`` when the record was logged with them as
    ``extra`` fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            A single-line JSON string.
        """
        log_entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        for key in ("worker_id", "operation"):
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(
    level: int = logging.WARNING,
    *,
    json_format: bool = False,
) -> logging.Logger:
    """Configure and return the root ``httpbench`` logger.

    The handler writes to stderr so the report on stdout stays clean.
    Repeated calls only adjust the level and formatter of the existing
    handler.

    Args:
        level: Logging level. Defaults to WARNING, which still shows every
            resolution, connection and join error.
        json_format: Emit structured JSON lines instead of plain text.

    Returns:
        The configured ``httpbench`` logger.
    """
    logger = logging.getLogger("httpbench")
    logger.setLevel(level)

    if json_format:
        formatter: logging.Formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``httpbench`` namespace.

    Args:
        name: Suffix appended to ``httpbench.``, e.g. ``"engine.worker"``.

    Returns:
        The child logger.
    """
    return logging.getLogger(f"httpbench.{name}")
