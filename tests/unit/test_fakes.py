"""Tests for fake implementations to ensure they work correctly."""

import io

import pytest
from PIL import Image

from batch_uploader.core.exceptions import HttpStatusError, NetworkError
from batch_uploader.core.models import UploadRequest
from batch_uploader.testing.fakes import (
    HOSTED_IMAGE_BASE,
    FakeHost,
    FakeNotifier,
    FakeTransport,
    create_test_image,
)


class TestFakeTransport:
    """Tests for FakeTransport to ensure it behaves like an image host."""

    async def test_default_upload_response(self):
        transport = FakeTransport()

        response = await transport.send_request(
            UploadRequest(method="POST", url="https://up.example.com/?filename=my%20cat.png", body=b"x")
        )

        assert response.status_code == 200
        assert response.text == '{"data": {"url": "%smy cat.png"}}' % HOSTED_IMAGE_BASE
        assert len(transport.requests) == 1

    async def test_default_download_response(self):
        transport = FakeTransport(default_download=b"pixels")

        response = await transport.send_request(UploadRequest(method="GET", url="https://example.com/a.png"))

        assert response.content == b"pixels"

    async def test_routed_json_response(self):
        transport = FakeTransport()
        transport.add_response("https://up.example.com/a", {"ok": True})

        response = await transport.send_request(UploadRequest(method="POST", url="https://up.example.com/a"))

        assert response.text == '{"ok": true}'

    async def test_routed_error_status(self):
        transport = FakeTransport()
        transport.add_response("https://up.example.com/a", "nope", status_code=503)

        with pytest.raises(HttpStatusError):
            await transport.send_request(UploadRequest(method="POST", url="https://up.example.com/a"))

    async def test_routed_failure(self):
        transport = FakeTransport()
        transport.add_failure("https://up.example.com/a", NetworkError("down"))

        with pytest.raises(NetworkError):
            await transport.send_request(UploadRequest(method="POST", url="https://up.example.com/a"))

    async def test_set_delay_keeps_response(self):
        transport = FakeTransport()
        transport.add_response("https://up.example.com/a", "body")
        transport.set_delay("https://up.example.com/a", 0.001)

        response = await transport.send_request(UploadRequest(method="POST", url="https://up.example.com/a"))

        assert response.text == "body"


class TestFakeNotifierAndHost:
    """Tests for FakeNotifier and FakeHost."""

    def test_notifier_records(self):
        notifier = FakeNotifier()
        notifier.notify("title", "body")
        assert notifier.notifications == [("title", "body")]
        assert notifier.titles == ["title"]

    def test_notifier_failure_mode(self):
        notifier = FakeNotifier()
        notifier.should_fail = True
        with pytest.raises(Exception, match="Simulated"):
            notifier.notify("title", "body")

    def test_host_config_lookup(self):
        host = FakeHost(config={"url": "https://up.example.com/"})
        assert host.get_config("picBed.sda1") == {"url": "https://up.example.com/"}
        assert host.get_config("other") is None


def test_create_test_image():
    data = create_test_image(20, 10)
    image = Image.open(io.BytesIO(data))
    assert image.size == (20, 10)
    assert image.format == "PNG"
