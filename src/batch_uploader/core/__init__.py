"""Core engine and shared components for the batch uploader."""

from .logging_config import get_logger, setup_logger
from .exceptions import (
    UploaderError,
    ConfigurationError,
    ConfigMissingError,
    BatchUploadError,
    InvalidArgumentsError,
    UploadTaskError,
    NoImageDataError,
    ImageDecodeError,
    RemoteDownloadError,
    InvalidUrlError,
    NetworkError,
    HttpStatusError,
    JsonParseError,
    ExtractionError,
    MissingFieldError,
    NotIndexableError,
    EmptyResultError,
    with_error_handling,
    batch_error_handler,
)
from .models import (
    ImageItem,
    ResultItem,
    TaggedOutcome,
    TaskState,
    TransportResponse,
    UploadConfig,
    UploadRequest,
)
from .path_extractor import PathExtractor, extract_path
from .request_builder import RequestBuilder, infer_content_type
from .fetcher import RemoteFetcher, validate_source_url
from .transport import HttpxTransport
from .services import BatchOrchestrator, UploadTask, upload_batch, upload_batch_async

__all__ = [
    "ImageItem",
    "ResultItem",
    "TaggedOutcome",
    "TaskState",
    "TransportResponse",
    "UploadConfig",
    "UploadRequest",
    "PathExtractor",
    "extract_path",
    "RequestBuilder",
    "infer_content_type",
    "RemoteFetcher",
    "validate_source_url",
    "HttpxTransport",
    "BatchOrchestrator",
    "UploadTask",
    "upload_batch",
    "upload_batch_async",
    "setup_logger",
    "get_logger",
    "UploaderError",
    "ConfigurationError",
    "ConfigMissingError",
    "BatchUploadError",
    "InvalidArgumentsError",
    "UploadTaskError",
    "NoImageDataError",
    "ImageDecodeError",
    "RemoteDownloadError",
    "InvalidUrlError",
    "NetworkError",
    "HttpStatusError",
    "JsonParseError",
    "ExtractionError",
    "MissingFieldError",
    "NotIndexableError",
    "EmptyResultError",
    "with_error_handling",
    "batch_error_handler",
]
