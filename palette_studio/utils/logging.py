"""
Palette Studio Structured Logging
Centralized loguru configuration plus a thin wrapper that attaches
per-request context (request id, timings, result) to every record.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from palette_studio.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"


class StructuredLogger:
    """Logger for request handlers; `extra` dicts are bound onto the record."""

    def __init__(self, level: Optional[str] = None):
        self._configure_logger(level or config.LOG_LEVEL)

    @staticmethod
    def _configure_logger(level: str):
        logger.remove()
        logger.add(sys.stdout, format=LOG_FORMAT, level=level, serialize=False)

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        target = logger.bind(**extra) if extra else logger
        # depth=2 reports the caller of info()/warning()/... rather than this wrapper
        target.opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("DEBUG", message, extra)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
