"""Builds outbound upload requests from image bytes."""

from typing import Optional
from urllib.parse import quote

from .. import __version__
from .exceptions import InvalidArgumentsError, with_error_handling
from .models import UploadRequest

USER_AGENT = f"batch-uploader/{__version__}"

DEFAULT_CONTENT_TYPE = "application/octet-stream"

EXTENSION_TO_MEDIA_TYPE = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}

# Characters encodeURIComponent leaves unescaped besides the unreserved set
_URI_COMPONENT_SAFE = "!~*'()"


def infer_content_type(file_name: str) -> str:
    """Content type for a filename, based on its lowercased extension."""
    if "." not in file_name:
        return DEFAULT_CONTENT_TYPE
    ext = file_name.rsplit(".", 1)[-1].lower()
    return EXTENSION_TO_MEDIA_TYPE.get(ext, DEFAULT_CONTENT_TYPE)


def encode_file_name(file_name: str) -> str:
    return quote(file_name, safe=_URI_COMPONENT_SAFE)


class RequestBuilder:
    """Creates the POST request that uploads one image."""

    def __init__(self, user_agent: str = USER_AGENT):
        self._user_agent = user_agent

    @with_error_handling
    def build(
        self,
        image: Optional[bytes],
        endpoint_url: str,
        file_name: str,
        timeout_millis: Optional[int] = None,
    ) -> UploadRequest:
        """
        Build the upload request for ``image``.

        The percent-encoded filename is appended to ``endpoint_url``, so
        endpoints are usually configured ending in a query parameter such as
        ``...?filename=``.

        Raises:
            InvalidArgumentsError: if the image, endpoint or filename is missing.
        """
        if not image or not endpoint_url or not file_name:
            missing = [
                name
                for name, value in (
                    ("image", image),
                    ("endpoint_url", endpoint_url),
                    ("file_name", file_name),
                )
                if not value
            ]
            raise InvalidArgumentsError(
                f"Invalid upload request arguments: missing {', '.join(missing)}"
            )

        headers = {
            "Content-Type": infer_content_type(file_name),
            "User-Agent": self._user_agent,
            "Connection": "keep-alive",
        }
        return UploadRequest(
            method="POST",
            url=endpoint_url + encode_file_name(file_name),
            headers=headers,
            body=bytes(image),
            timeout_millis=timeout_millis,
        )
