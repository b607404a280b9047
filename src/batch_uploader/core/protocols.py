"""Protocol definitions for dependency injection and testability."""

from typing import Any, Protocol

from .models import TransportResponse, UploadRequest


class TransportProtocol(Protocol):
    """Protocol for sending HTTP requests.

    Implementations raise ``NetworkError`` for timeouts and connection
    failures and ``HttpStatusError`` for non-success responses.
    """

    async def send_request(self, request: UploadRequest) -> TransportResponse:
        """Send a request and return its status and body."""
        ...


class NotifierProtocol(Protocol):
    """Protocol for user-facing notifications."""

    def notify(self, title: str, body: str) -> None:
        """Emit a notification."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        ...
