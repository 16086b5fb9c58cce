"""Structured key=value logging for the Risk Audit Engine."""

import logging
import sys
from typing import Any

# Record attributes promoted to top-level keys when present.
CONTEXT_FIELDS = ("audit_id",)

ENV_LOG_LEVELS = {
    "dev": logging.DEBUG,
    "test": logging.INFO,
    "prod": logging.INFO,
}


class StructuredFormatter(logging.Formatter):
    """Renders a record as space-separated key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                fields[name] = getattr(record, name)
        fields.update(getattr(record, "extra_data", {}))

        line = " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _env_level() -> int:
    try:
        from risk_audit.core.config import get_settings

        return ENV_LOG_LEVELS.get(get_settings().AUDIT_ENGINE_ENV, logging.INFO)
    except Exception:
        return logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger writing structured lines to stdout.

    Handlers are attached once per logger name; the level follows
    AUDIT_ENGINE_ENV (DEBUG in dev).
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.setLevel(_env_level())
    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **fields: Any) -> None:
    """Log msg with audit_id and any other keyword fields attached to the line."""
    extra: dict[str, Any] = {name: fields.pop(name) for name in CONTEXT_FIELDS if name in fields}
    extra["extra_data"] = fields
    logger.log(level, msg, extra=extra)
