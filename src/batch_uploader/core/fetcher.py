"""Downloads remote source images."""

import re
from typing import Optional
from urllib.parse import urlparse

from .exceptions import HttpStatusError, InvalidUrlError
from .logging_config import get_logger
from .models import UploadRequest
from .protocols import LoggerProtocol, TransportProtocol
from .request_builder import USER_AGENT

HTTP_OK = 200

_HOSTNAME_RE = re.compile(r"^[\da-z.-]+\.[a-z]{2,63}$")


def validate_source_url(url: str) -> str:
    """
    Check that ``url`` looks like ``[http(s)://]host.tld[/path]``.

    Returns the URL with an ``http://`` scheme added when it had none.

    Raises:
        InvalidUrlError: if the URL is malformed.
    """
    candidate = (url or "").strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        raise InvalidUrlError(url)

    if "://" not in candidate:
        candidate = f"http://{candidate}"

    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidUrlError(url) from exc

    if parsed.scheme.lower() not in ("http", "https"):
        raise InvalidUrlError(url)
    if not hostname or not _HOSTNAME_RE.match(hostname):
        raise InvalidUrlError(url)
    return candidate


class RemoteFetcher:
    """Fetches the bytes of an image hosted at a remote URL."""

    def __init__(
        self,
        transport: TransportProtocol,
        logger: Optional[LoggerProtocol] = None,
        user_agent: str = USER_AGENT,
    ):
        self._transport = transport
        self._logger = logger or get_logger("fetcher")
        self._user_agent = user_agent

    async def fetch(self, url: str, timeout_millis: int) -> bytes:
        """
        Download ``url`` and return the response body.

        Raises:
            InvalidUrlError: the URL is malformed; no request is sent.
            HttpStatusError: the response status is not 200.
            NetworkError: the request timed out or the connection failed.
        """
        target = validate_source_url(url)
        self._logger.debug(f"Downloading source image {target}")

        response = await self._transport.send_request(
            UploadRequest(
                method="GET",
                url=target,
                headers={"User-Agent": self._user_agent},
                timeout_millis=timeout_millis,
            )
        )
        if response.status_code != HTTP_OK:
            raise HttpStatusError(response.status_code, target)
        return response.content
