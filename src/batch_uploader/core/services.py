"""Upload task and batch orchestration services."""

import asyncio
import base64
import binascii
import json
from operator import attrgetter
from typing import List, Optional, Sequence

from .error_handling import BatchOperationContextManager
from .exceptions import (
    EmptyResultError,
    ExtractionError,
    ConfigMissingError,
    HttpStatusError,
    ImageDecodeError,
    JsonParseError,
    NoImageDataError,
    RemoteDownloadError,
    UploaderError,
    UploadTaskError,
    batch_error_handler,
    describe_error,
    with_error_handling,
)
from .fetcher import RemoteFetcher
from .logging_config import get_logger
from .models import (
    DEFAULT_TIMEOUT_MILLIS,
    ImageItem,
    ResultItem,
    TaggedOutcome,
    TaskState,
    TransportResponse,
    UploadConfig,
)
from .notifications import LoggingNotifier, notify_safely
from .path_extractor import PathExtractor
from .protocols import LoggerProtocol, NotifierProtocol, TransportProtocol
from .request_builder import RequestBuilder
from .transport import HttpxTransport

BATCH_FAILURE_TITLE = "Upload failed"

_DATA_URI_MARKER = ";base64,"


@with_error_handling
def decode_base64_image(data: str) -> bytes:
    """Decode base64 image data, accepting an optional ``data:`` URI prefix."""
    if _DATA_URI_MARKER in data:
        data = data.split(_DATA_URI_MARKER, 1)[1]
    # MIME line breaks are not part of the payload
    data = "".join(data.split())
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(f"Failed to decode base64 image data: {exc}") from exc


class UploadTask:
    """Uploads one item of a batch.

    The task moves through ``RESOLVING_BYTES -> UPLOADING -> EXTRACTING_RESULT
    -> SUCCEEDED`` and can drop to ``FAILED`` from any state. ``run`` always
    returns a ``TaggedOutcome``; errors never propagate to the caller.
    """

    def __init__(
        self,
        index: int,
        item: ImageItem,
        config: UploadConfig,
        transport: TransportProtocol,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        fetcher: Optional[RemoteFetcher] = None,
        request_builder: Optional[RequestBuilder] = None,
        path_extractor: Optional[PathExtractor] = None,
    ):
        self.index = index
        self.state = TaskState.RESOLVING_BYTES
        self._item = item
        self._config = config
        self._transport = transport
        self._notifier = notifier
        self._logger = logger
        self._fetcher = fetcher or RemoteFetcher(transport, logger)
        self._request_builder = request_builder or RequestBuilder()
        self._path_extractor = path_extractor or PathExtractor()

    @property
    def label(self) -> str:
        return f"#{self.index + 1} {self._item.file_name or '<unnamed>'}"

    def _transition(self, state: TaskState) -> None:
        self._logger.debug(f"[{self.label}] {self.state.value} -> {state.value}")
        self.state = state

    def _discard_image_data(self) -> None:
        self._item.binary_data = None
        self._item.base64_data = None

    async def run(self) -> TaggedOutcome:
        try:
            image = await self._resolve_bytes()

            self._transition(TaskState.UPLOADING)
            request = self._request_builder.build(
                image,
                self._config.endpoint_url,
                self._item.file_name,
                timeout_millis=self._config.timeout_millis,
            )
            response = await self._transport.send_request(request)
            if not 200 <= response.status_code < 300:
                raise HttpStatusError(response.status_code, request.url)
            del image, request
            self._discard_image_data()

            self._transition(TaskState.EXTRACTING_RESULT)
            result_url = self._extract_result_url(response)
        except Exception as exc:  # noqa: BLE001
            return self._fail(exc)

        self._transition(TaskState.SUCCEEDED)
        self._logger.info(f"[{self.label}] Uploaded to {result_url}")
        return TaggedOutcome(
            original_index=self.index,
            payload=ResultItem.from_item(self._item, result_url=result_url),
            state=self.state,
        )

    async def _resolve_bytes(self) -> bytes:
        item = self._item
        if item.binary_data:
            return item.binary_data
        if item.base64_data:
            decoded = decode_base64_image(item.base64_data)
            if decoded:
                return decoded
        if item.source_url:
            try:
                fetched = await self._fetcher.fetch(item.source_url, self._config.timeout_millis)
            except Exception as exc:  # noqa: BLE001
                self._logger.error(f"[{self.label}] Source image download failed: {exc}")
                raise RemoteDownloadError(
                    f"Remote image download failed: {describe_error(exc)}"
                ) from exc
            if fetched:
                return fetched
        raise NoImageDataError()

    def _extract_result_url(self, response: TransportResponse) -> str:
        body = response.text
        path = self._config.response_path
        if not path:
            if not body:
                raise EmptyResultError("Upload response body is empty")
            return body

        try:
            parsed = json.loads(body)
        except ValueError as exc:
            raise JsonParseError(f"Response is not valid JSON: {exc}", body) from exc

        try:
            return self._path_extractor.extract(parsed, path)
        except ExtractionError as exc:
            exc.with_response(body)
            raise

    def _fail(self, exc: Exception) -> TaggedOutcome:
        self._discard_image_data()
        self._transition(TaskState.FAILED)

        message = describe_error(exc)
        if isinstance(exc, UploadTaskError):
            self._logger.error(f"[{self.label}] Upload failed: {message}")
        else:
            self._logger.error(f"[{self.label}] Upload failed with unexpected {type(exc).__name__}: {message}")

        body = message
        excerpt = getattr(exc, "response_excerpt", "")
        if excerpt:
            body = f"{message}\nResponse: {excerpt}"
        notify_safely(
            self._notifier, f"Image {self.index + 1} failed to upload", body, self._logger
        )

        return TaggedOutcome(
            original_index=self.index,
            payload=ResultItem.from_item(self._item, result_url="", error_message=message),
            state=self.state,
        )


class BatchOrchestrator:
    """Uploads a batch of items concurrently and returns results in input order."""

    def __init__(
        self,
        transport: TransportProtocol,
        notifier: Optional[NotifierProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        request_builder: Optional[RequestBuilder] = None,
        path_extractor: Optional[PathExtractor] = None,
    ):
        self._transport = transport
        self._logger = logger or get_logger("orchestrator")
        self._notifier = notifier or LoggingNotifier(self._logger)
        self._fetcher = RemoteFetcher(transport, self._logger)
        self._request_builder = request_builder or RequestBuilder()
        self._path_extractor = path_extractor or PathExtractor()

    def create_task(self, index: int, item: ImageItem, config: UploadConfig) -> UploadTask:
        return UploadTask(
            index,
            item.model_copy(),
            config,
            transport=self._transport,
            notifier=self._notifier,
            logger=self._logger,
            fetcher=self._fetcher,
            request_builder=self._request_builder,
            path_extractor=self._path_extractor,
        )

    async def run(
        self, items: Sequence[ImageItem], config: Optional[UploadConfig]
    ) -> List[ResultItem]:
        """
        Upload every item and return one result per item, in input order.

        Per-item failures come back as results with an empty ``result_url``
        and an ``error_message``. Errors outside the tasks (missing config,
        orchestration faults) fail the whole batch: they are notified once
        and re-raised.
        """
        try:
            if config is None:
                raise ConfigMissingError()
            with batch_error_handler():
                return await self._run_batch(list(items), config)
        except UploaderError as exc:
            self._logger.error(f"Batch upload failed: {exc}")
            notify_safely(self._notifier, BATCH_FAILURE_TITLE, describe_error(exc), self._logger)
            raise

    async def _run_batch(self, snapshot: List[ImageItem], config: UploadConfig) -> List[ResultItem]:
        with BatchOperationContextManager(
            f"Upload of {len(snapshot)} image(s)", self._logger
        ) as batch:
            tasks = [
                self.create_task(index, item, config) for index, item in enumerate(snapshot)
            ]
            outcomes = await asyncio.gather(*(task.run() for task in tasks))

            ordered = sorted(outcomes, key=attrgetter("original_index"))
            for outcome in ordered:
                if not outcome.succeeded:
                    batch.add_error(
                        outcome.payload.error_message or "",
                        f"#{outcome.original_index + 1} {outcome.payload.file_name}",
                    )
            return [outcome.payload for outcome in ordered]


async def upload_batch_async(
    items: Sequence[ImageItem],
    config: Optional[UploadConfig],
    transport: TransportProtocol,
    notifier: Optional[NotifierProtocol] = None,
    logger: Optional[LoggerProtocol] = None,
) -> List[ResultItem]:
    """Upload a batch through ``transport``."""
    orchestrator = BatchOrchestrator(transport, notifier=notifier, logger=logger)
    return await orchestrator.run(items, config)


def upload_batch(
    items: Sequence[ImageItem],
    config: Optional[UploadConfig],
    transport: Optional[TransportProtocol] = None,
    notifier: Optional[NotifierProtocol] = None,
) -> List[ResultItem]:
    """
    Upload a batch of images.

    This is the synchronous wrapper that runs the async orchestrator. Without
    a transport, an ``HttpxTransport`` is opened for the call and closed after.
    """

    async def _run() -> List[ResultItem]:
        if transport is not None:
            return await upload_batch_async(items, config, transport, notifier)
        timeout_millis = config.timeout_millis if config is not None else DEFAULT_TIMEOUT_MILLIS
        async with HttpxTransport(default_timeout_millis=timeout_millis) as http:
            return await upload_batch_async(items, config, http, notifier)

    return asyncio.run(_run())
