"""Default HTTP transport built on httpx."""

from typing import Optional

import httpx

from .exceptions import HttpStatusError, NetworkError
from .logging_config import get_logger
from .models import DEFAULT_TIMEOUT_MILLIS, TransportResponse, UploadRequest

logger = get_logger("transport")


class HttpxTransport:
    """Sends upload and download requests through a shared ``httpx.AsyncClient``.

    The client is created on first use and closed by ``aclose`` (or on
    leaving ``async with``). A client passed in by the caller is not closed.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        default_timeout_millis: int = DEFAULT_TIMEOUT_MILLIS,
    ):
        self._client = client
        self._owns_client = client is None
        self._default_timeout_millis = default_timeout_millis

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
        return self._client

    async def send_request(self, request: UploadRequest) -> TransportResponse:
        timeout_millis = request.timeout_millis or self._default_timeout_millis
        client = self._get_client()
        try:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=timeout_millis / 1000,
            )
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"{request.method} {request.url} timed out after {timeout_millis} ms"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"{request.method} {request.url} failed: {exc}") from exc

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        if not response.is_success:
            raise HttpStatusError(response.status_code, request.url)
        return TransportResponse(status_code=response.status_code, content=response.content)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        self._get_client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
