"""Tests for logging setup."""

from __future__ import annotations

import json
import logging

from httpbench._internal.logging import _JsonFormatter, get_logger, setup_logging


def test_get_logger_namespace():
    assert get_logger("engine.worker").name == "httpbench.engine.worker"


def test_setup_is_idempotent():
    logger = setup_logging(level=logging.INFO)
    setup_logging(level=logging.DEBUG)
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG
    assert logger.propagate is False


def test_setup_switches_formatter():
    logger = setup_logging()
    setup_logging(json_format=True)
    assert isinstance(logger.handlers[0].formatter, _JsonFormatter)


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord(
        name="httpbench.engine.worker",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg="Worker %d: connect failed",
        args=(2,),
        exc_info=None,
    )
    record.worker_id = 2
    record.operation = "connect"
    entry = json.loads(_JsonFormatter().format(record))
    assert entry["level"] == "ERROR"
    assert entry["logger"] == "httpbench.engine.worker"
    assert entry["message"] == "Worker 2: connect failed"
    assert entry["worker_id"] == 2
    assert entry["operation"] == "connect"
    assert "thread" in entry
