"""Factory classes for creating configured service instances."""

import logging
from typing import Any, Optional

from .logging_config import get_logger
from .notifications import LoggingNotifier
from .protocols import LoggerProtocol, NotifierProtocol, TransportProtocol
from .services import BatchOrchestrator
from .transport import HttpxTransport


class LoggerAdapter:
    """Adapter to make standard logger compatible with LoggerProtocol."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._logger.debug(message)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._logger.info(message)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._logger.warning(message)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._logger.error(message)


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str, level: Optional[int] = None) -> LoggerProtocol:
        """Create a logger configured through ``logging_config``."""
        logger = get_logger(name)
        if level is not None:
            logger.setLevel(level)
        return LoggerAdapter(logger)


class UploaderFactory:
    """Factory for creating a fully wired batch orchestrator."""

    @staticmethod
    def create_orchestrator(
        transport: Optional[TransportProtocol] = None,
        notifier: Optional[NotifierProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
    ) -> BatchOrchestrator:
        """
        Create an orchestrator, filling in defaults for missing collaborators.

        The default transport is a new ``HttpxTransport``; the caller owns it
        and should close it with ``aclose()`` when done.
        """
        if logger is None:
            logger = LoggerFactory.create_logger("uploader")

        if transport is None:
            transport = HttpxTransport()

        if notifier is None:
            notifier = LoggingNotifier(logger)

        return BatchOrchestrator(transport=transport, notifier=notifier, logger=logger)
