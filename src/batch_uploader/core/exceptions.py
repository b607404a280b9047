"""Custom exceptions and error handling utilities for the batch uploader."""

from __future__ import annotations

from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, TypeVar

from .logging_config import get_logger

RESPONSE_EXCERPT_LENGTH = 200


class UploaderError(Exception):
    """Base exception for all batch uploader errors."""


class ConfigurationError(UploaderError):
    """Error raised for invalid configuration options."""


class ConfigMissingError(ConfigurationError):
    """Error raised when the uploader configuration cannot be found."""

    def __init__(self, key: str = "") -> None:
        detail = f" '{key}'" if key else ""
        super().__init__(f"Can't find uploader config{detail}")
        self.key = key


class BatchUploadError(UploaderError):
    """Error raised when a batch fails as a whole, outside any single upload."""


class InvalidArgumentsError(UploaderError):
    """Error raised when an upload request is built from incomplete arguments."""


class UploadTaskError(UploaderError):
    """Error raised when uploading a single image fails."""


class NoImageDataError(UploadTaskError):
    """Error raised when an item has no binary data, base64 data or source URL."""

    def __init__(self, message: str = "No image data: item has no bytes, base64 data or source URL") -> None:
        super().__init__(message)


class ImageDecodeError(UploadTaskError):
    """Error raised when base64 image data cannot be decoded."""


class RemoteDownloadError(UploadTaskError):
    """Error raised when the remote source image cannot be downloaded."""


class InvalidUrlError(UploadTaskError):
    """Error raised for a malformed source URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL format: {url!r}")
        self.url = url


class NetworkError(UploadTaskError):
    """Error raised for timeouts and connection failures."""


class HttpStatusError(UploadTaskError):
    """Error raised when a response carries an unexpected HTTP status."""

    def __init__(self, status_code: int, url: str = "") -> None:
        target = f" from {url}" if url else ""
        super().__init__(f"HTTP {status_code}{target}")
        self.status_code = status_code
        self.url = url


class JsonParseError(UploadTaskError):
    """Error raised when an upload response is not valid JSON."""

    def __init__(self, message: str, response_body: str = "") -> None:
        super().__init__(message)
        self.response_excerpt = response_body[:RESPONSE_EXCERPT_LENGTH]


class ExtractionError(UploadTaskError):
    """Base error for failures resolving a field path in a JSON response."""

    response_excerpt: str = ""

    def with_response(self, response_body: str) -> "ExtractionError":
        self.response_excerpt = response_body[:RESPONSE_EXCERPT_LENGTH]
        return self


class MissingFieldError(ExtractionError):
    """The named field does not exist on the current object."""

    def __init__(self, field: str, path: str = "") -> None:
        super().__init__(f"JSON path field '{field}' does not exist" + (f" (path '{path}')" if path else ""))
        self.field = field
        self.path = path


class NotIndexableError(ExtractionError):
    """The value at the current step is not an object."""

    def __init__(self, field: str, actual_type: str, path: str = "") -> None:
        super().__init__(
            f"Cannot read field '{field}' from a {actual_type} value" + (f" (path '{path}')" if path else "")
        )
        self.field = field
        self.actual_type = actual_type
        self.path = path


class EmptyResultError(ExtractionError):
    """The resolved value is empty or not a string."""

    def __init__(self, message: str = "URL extracted from the response is empty") -> None:
        super().__init__(message)


F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """Wrap a function with standardized error handling."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        logger = get_logger("uploader")
        try:
            return func(*args, **kwargs)
        except UploaderError as exc:
            logger.debug(f"{func.__name__} failed: {exc}")
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Unhandled error in {func.__name__}: {exc}", exc_info=True)
            raise UploadTaskError(str(exc)) from exc

    return wrapper  # type: ignore[return-value]


@contextmanager
def batch_error_handler() -> Any:
    """Context manager to wrap batch operations with error handling."""
    try:
        yield
    except UploaderError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise BatchUploadError(str(exc)) from exc


def describe_error(exc: BaseException) -> str:
    """Human-readable message for an error, falling back to its type name."""
    return str(exc) or type(exc).__name__
