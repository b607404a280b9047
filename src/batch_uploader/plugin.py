"""Host adapter: uploader registration, config schema and the upload handle.

This layer only translates between a host application and the core engine.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import DEFAULT_CONFIG_KEY, DEFAULT_ENDPOINT_URL, DEFAULT_RESPONSE_PATH
from .core.exceptions import BatchUploadError, UploaderError, describe_error
from .core.factories import LoggerFactory, UploaderFactory
from .core.models import DEFAULT_TIMEOUT_MILLIS, ImageItem, TransportResponse, UploadConfig, UploadRequest
from .core.notifications import notify_safely
from .core.protocols import LoggerProtocol
from .core.services import BATCH_FAILURE_TITLE

DEFAULT_UPLOADER_ID = "sda1"
DEFAULT_UPLOADER_NAME = "SDA1"


class HostContext(Protocol):
    """What the host hands to ``handle``: its queue, config store, transport and notifications."""

    output: List[Any]

    def get_config(self, key: str) -> Optional[Mapping[str, Any]]:
        ...

    async def send_request(self, request: UploadRequest) -> TransportResponse:
        ...

    def notify(self, title: str, body: str) -> None:
        ...


class ConfigOption(BaseModel):
    """One entry of the uploader's config schema, as shown in the host UI."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    type: str = "input"
    default: Any = None
    required: bool = False
    message: str = ""
    alias: str = ""
    validate_value: Optional[Callable[[Any], Union[bool, str]]] = Field(default=None, exclude=True)


def validate_timeout(value: Any) -> Union[bool, str]:
    """True for a positive integer, otherwise the message shown to the user."""
    try:
        return int(value) > 0 or "Must be a positive integer"
    except (TypeError, ValueError):
        return "Must be a positive integer"


def _coerce_items(raw_items: List[Any]) -> List[ImageItem]:
    """Accept host items as ImageItem instances or mappings in host key names."""
    try:
        return [
            item if isinstance(item, ImageItem) else ImageItem.model_validate(item)
            for item in raw_items
        ]
    except ValidationError as exc:
        raise BatchUploadError(f"Invalid image item: {exc}") from exc


@dataclass(frozen=True)
class UploaderRegistration:
    name: str
    handle: Callable[[HostContext], Awaitable[None]]
    config: Callable[[HostContext], List[ConfigOption]]


class UploaderRegistry(Protocol):
    def register(self, uploader_id: str, registration: UploaderRegistration) -> None:
        ...


class UploaderPlugin:
    """Exposes the batch uploader to a host's uploader registry."""

    def __init__(
        self,
        uploader_id: str = DEFAULT_UPLOADER_ID,
        name: str = DEFAULT_UPLOADER_NAME,
        config_key: str = DEFAULT_CONFIG_KEY,
        logger: Optional[LoggerProtocol] = None,
    ):
        self.uploader_id = uploader_id
        self.name = name
        self.config_key = config_key
        self._logger = logger or LoggerFactory.create_logger("plugin")

    def register(self, registry: UploaderRegistry) -> None:
        registry.register(
            self.uploader_id,
            UploaderRegistration(name=self.name, handle=self.handle, config=self.config_schema),
        )

    def config_schema(self, ctx: HostContext) -> List[ConfigOption]:
        """Config options, defaulting to the user's saved values where present."""
        user_config = ctx.get_config(self.config_key) or {}
        return [
            ConfigOption(
                name="url",
                default=user_config.get("url") or DEFAULT_ENDPOINT_URL,
                required=True,
                message="API endpoint URL",
                alias="API URL",
            ),
            ConfigOption(
                name="jsonPath",
                default=user_config.get("jsonPath") or DEFAULT_RESPONSE_PATH,
                required=False,
                message="JSON path of the image URL in the response (e.g. data.url)",
                alias="JSON path",
            ),
            ConfigOption(
                name="timeout",
                default=user_config.get("timeout") or DEFAULT_TIMEOUT_MILLIS,
                required=True,
                message="Download timeout (milliseconds)",
                alias="Timeout",
                validate_value=validate_timeout,
            ),
        ]

    async def handle(self, ctx: HostContext) -> None:
        """Upload everything in ``ctx.output`` and replace it with the ordered results."""
        try:
            config = UploadConfig.from_host(ctx.get_config(self.config_key), self.config_key)
            items = _coerce_items(ctx.output)
        except UploaderError as exc:
            self._logger.error(f"Upload batch rejected: {exc}")
            notify_safely(ctx, BATCH_FAILURE_TITLE, describe_error(exc), self._logger)
            raise

        orchestrator = UploaderFactory.create_orchestrator(
            transport=ctx, notifier=ctx, logger=self._logger
        )
        ctx.output = await orchestrator.run(items, config)
