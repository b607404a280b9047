import logging
from unittest.mock import patch

import pytest

from batch_uploader.core.exceptions import (
    BatchUploadError,
    ExtractionError,
    HttpStatusError,
    InvalidArgumentsError,
    JsonParseError,
    MissingFieldError,
    NetworkError,
    UploadTaskError,
    batch_error_handler,
    describe_error,
    with_error_handling,
)


@with_error_handling
def _fail_func() -> None:
    raise ValueError("boom")


@with_error_handling
def _fail_with_uploader_error() -> None:
    raise InvalidArgumentsError("missing file_name")


def test_with_error_handling_wraps_unknown_errors() -> None:
    with pytest.raises(UploadTaskError, match="boom"):
        _fail_func()


def test_with_error_handling_keeps_uploader_errors() -> None:
    with pytest.raises(InvalidArgumentsError):
        _fail_with_uploader_error()


def test_with_error_handling_logs_error() -> None:
    with patch("batch_uploader.core.exceptions.get_logger") as mock_get_logger:
        mock_logger = logging.getLogger("test")
        mock_get_logger.return_value = mock_logger
        with pytest.raises(UploadTaskError):
            _fail_func()
        assert mock_get_logger.called


def test_batch_error_handler_wraps_unknown_errors() -> None:
    with pytest.raises(BatchUploadError, match="kaput") as exc_info:
        with batch_error_handler():
            raise RuntimeError("kaput")
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_batch_error_handler_passes_uploader_errors() -> None:
    with pytest.raises(NetworkError):
        with batch_error_handler():
            raise NetworkError("offline")


def test_http_status_error_message() -> None:
    err = HttpStatusError(404, "https://x.example.com/a.png")
    assert err.status_code == 404
    assert str(err) == "HTTP 404 from https://x.example.com/a.png"


def test_response_excerpt_is_truncated() -> None:
    body = "x" * 500
    assert JsonParseError("bad", body).response_excerpt == "x" * 200
    err = MissingFieldError("url").with_response(body)
    assert isinstance(err, ExtractionError)
    assert len(err.response_excerpt) == 200


def test_describe_error_falls_back_to_type_name() -> None:
    assert describe_error(ValueError()) == "ValueError"
    assert describe_error(ValueError("bad")) == "bad"
