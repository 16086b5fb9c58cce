"""Tests for structured logging helpers."""

import logging
from unittest.mock import MagicMock

from risk_audit.core.logging import StructuredFormatter, get_logger, log_with_context


def _record(**attrs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="risk_audit.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Augmentation timed out",
        args=(),
        exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


def test_formatter_renders_key_value_pairs():
    line = StructuredFormatter().format(
        _record(audit_id="abc-123", extra_data={"timeout_seconds": 8.0})
    )

    assert "level=WARNING" in line
    assert "message=Augmentation timed out" in line
    assert "audit_id=abc-123" in line
    assert "timeout_seconds=8.0" in line


def test_formatter_without_context():
    line = StructuredFormatter().format(_record())
    assert "audit_id=" not in line


def test_log_with_context_splits_audit_id_from_extra_fields():
    logger = MagicMock()
    log_with_context(logger, logging.INFO, "Audit report generated", audit_id="a-1", augmented=False)

    logger.log.assert_called_once_with(
        logging.INFO,
        "Audit report generated",
        extra={"audit_id": "a-1", "extra_data": {"augmented": False}},
    )


def test_get_logger_attaches_one_handler():
    logger = get_logger("risk_audit.tests.single_handler")
    again = get_logger("risk_audit.tests.single_handler")

    assert logger is again
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, StructuredFormatter)
    assert logger.level == logging.INFO
