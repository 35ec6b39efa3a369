"""
SocialHub logging.

Every log line carries the keyword context passed at the call site, rendered
as one JSON object per line (default) or as ``key=value`` text when
SOCIALHUB_LOG_FORMAT=text.
"""
import json
import logging
import os
import sys
import time
import traceback
from datetime import datetime, timezone
from functools import wraps
from typing import Optional

LOG_LEVEL = os.environ.get("SOCIALHUB_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("SOCIALHUB_LOG_FORMAT", "json")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": _timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "context", {}))
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``<time> LEVEL logger: message key=value ...`` for local development."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{_timestamp()} {record.levelname:<7} {record.name}: {record.getMessage()}"
        context = getattr(record, "context", {})
        pairs = " ".join(f"{key}={value}" for key, value in context.items() if key != "traceback")
        if pairs:
            line = f"{line} {pairs}"
        if "traceback" in context:
            line = f"{line}\n{context['traceback']}"
        return line


class StructuredLogger:
    """Thin wrapper over a stdlib logger that accepts context as keywords."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

        # Loggers are shared by name, so only the first wrapper installs a handler
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(TextFormatter() if LOG_FORMAT == "text" else StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.propagate = False

    @property
    def name(self) -> str:
        return self.logger.name

    def _log(self, level: int, message: str, context: dict):
        self.logger.log(level, message, extra={"context": context})

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, error: Optional[Exception] = None, **context):
        if error is not None:
            context.update(
                error_type=type(error).__name__,
                error_message=str(error),
                traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
            )
        self._log(logging.ERROR, message, context)


def timed(logger: StructuredLogger):
    """Log how long the wrapped call took, at debug level or as an error if it raised."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__name__} failed", error=e, duration_ms=_elapsed_ms(start))
                raise
            logger.debug(f"{func.__name__} completed", duration_ms=_elapsed_ms(start))
            return result

        return wrapper

    return decorator


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


api_logger = StructuredLogger("socialhub.api")
auth_logger = StructuredLogger("socialhub.auth")
db_logger = StructuredLogger("socialhub.db")
ai_logger = StructuredLogger("socialhub.ai")


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(f"socialhub.{name}")
