"""Notification sinks."""

from typing import Optional

from .logging_config import get_logger
from .protocols import LoggerProtocol, NotifierProtocol


class LoggingNotifier:
    """Notifier that writes notifications to the log, used when no host sink exists."""

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        self._logger = logger or get_logger("notifications")

    def notify(self, title: str, body: str) -> None:
        self._logger.warning(f"{title}: {body}")


def notify_safely(
    notifier: NotifierProtocol,
    title: str,
    body: str,
    logger: Optional[LoggerProtocol] = None,
) -> None:
    """Send a notification; a failing sink is logged and never interrupts the caller."""
    try:
        notifier.notify(title, body)
    except Exception as exc:  # noqa: BLE001
        (logger or get_logger("notifications")).warning(
            f"Notification '{title}' could not be delivered: {exc}"
        )
