"""Testing utilities and fakes for the batch uploader."""

from .fakes import (
    FakeHost,
    FakeLogger,
    FakeNotifier,
    FakeRegistry,
    FakeRoute,
    FakeTransport,
    HOSTED_IMAGE_BASE,
    create_test_image,
)

__all__ = [
    "FakeHost",
    "FakeLogger",
    "FakeNotifier",
    "FakeRegistry",
    "FakeRoute",
    "FakeTransport",
    "HOSTED_IMAGE_BASE",
    "create_test_image",
]
