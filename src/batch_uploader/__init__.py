"""Concurrent, order-preserving batch image uploader."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    BatchOrchestrator,
    ImageItem,
    ResultItem,
    UploadConfig,
    upload_batch,
    upload_batch_async,
)

__all__ = [
    "__version__",
    "BatchOrchestrator",
    "ImageItem",
    "ResultItem",
    "UploadConfig",
    "upload_batch",
    "upload_batch_async",
]
