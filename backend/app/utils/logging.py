"""
GamePalette Structured Logging
A single loguru stdout sink; request fields travel as bound extras.
"""
import sys
from typing import Any, Dict, Optional

from loguru import logger

from app.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message} | {extra}"


class StructuredLogger:
    """
    Request-scoped logging for the palette service.

    Core modules log through ``loguru.logger`` directly; the request layer
    goes through this wrapper so ``request_id``, stage timings and ``result``
    show up in the ``{extra}`` column.
    """

    def __init__(self, level: Optional[str] = None):
        self.level = (level or config.LOG_LEVEL).upper()
        logger.remove()
        logger.add(sys.stdout, format=LOG_FORMAT, level=self.level, serialize=False)

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        # depth=2 attributes the record to the caller of info()/warning()/...
        logger.bind(**(extra or {})).opt(depth=2).log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)


_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Shared logger; the sink is installed on first call."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
