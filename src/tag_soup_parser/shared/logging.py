"""Correlation-aware logging for tag-soup parsing.

Every record emitted through :class:`CorrelationLogger` carries the parsing
component that produced it and an optional correlation ID, so callers that run
many parses side by side (a build tool processing a batch of templates, say)
can tell the records apart.
"""

import logging
from typing import Any, Dict, Optional, Union

PACKAGE_LOGGER_NAME = "tag_soup_parser"

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CorrelationLogger:
    """Thin wrapper over :mod:`logging` that stamps component and correlation ID."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID shared by one parse request
            component: Component name; defaults to the last dotted part of name
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.rsplit(".", 1)[-1]

    def _extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined.update(extra)
        return combined

    def is_debug_enabled(self) -> bool:
        """Check whether DEBUG records would be emitted.

        The tokenizer asks this before assembling per-recovery ``extra`` dicts
        in its scanning loop.
        """
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log error message with correlation info."""
        self.logger.error(message, extra=self._extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log error message with the active exception's traceback."""
        self.logger.exception(message, extra=self._extra(extra))


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def set_package_level(level: Union[str, int]) -> None:
    """Set the level of the package logger without touching its handlers.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level

    Raises:
        ValueError: If a level name is not one of the standard ones
    """
    if isinstance(level, str):
        if level.upper() not in _VALID_LEVELS:
            raise ValueError(f"logging level must be one of {list(_VALID_LEVELS)}")
        level = level.upper()
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)
