"""
hexpalette Structured Logging
Package loguru handler plus a small structured facade for pipeline events.
"""
import sys
from typing import Any, Dict, List, Optional, TextIO

from loguru import logger

from hexpalette.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[component]} | {message} | {extra}"


def _format(record: Dict[str, Any]) -> str:
    # Plain logger calls inside the package carry no component
    record["extra"].setdefault("component", "hexpalette")
    return LOG_FORMAT + "\n{exception}"


class StructuredLogger:
    """Structured logger bound to one pipeline component."""

    def __init__(self, component: str = "hexpalette", level: Optional[str] = None,
                 sink: Optional[TextIO] = None):
        self.component = component
        self.level = (level or config.LOG_LEVEL).upper()
        self.sink = sink if sink is not None else sys.stderr
        self._handler_id: Optional[int] = None
        self._configure_logger()

    def _configure_logger(self):
        """Add the package handler; handlers installed by the host stay in place."""
        self._handler_id = logger.add(
            self.sink,
            format=_format,
            level=self.level,
            filter="hexpalette",
            serialize=False  # Set to True for JSON output
        )

    def close(self):
        """Remove the package handler."""
        if self._handler_id is not None:
            logger.remove(self._handler_id)
            self._handler_id = None

    def _emit(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        bound = logger.bind(component=self.component, **(extra or {}))
        bound.log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._emit("DEBUG", message, extra)

    def palette_extracted(self, palette: List[str], real_count: int,
                          synthesized_count: int, duration_ms: float):
        """Log the one-line summary emitted after every extraction."""
        self.info(
            f"Extracted palette {' '.join(palette)}",
            extra={
                "real_count": real_count,
                "synthesized_count": synthesized_count,
                "duration_ms": round(duration_ms, 2),
            },
        )


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the package logger, installing its sink on first use."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger


def configure_logging(level: Optional[str] = None, sink: Optional[TextIO] = None) -> StructuredLogger:
    """Reinstall the package sink, e.g. to change level or capture output in tests."""
    global _logger
    if _logger is not None:
        _logger.close()
    _logger = StructuredLogger(level=level, sink=sink)
    return _logger
