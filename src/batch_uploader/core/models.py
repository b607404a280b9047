"""Shared data models for the batch uploader."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from .exceptions import ConfigMissingError, ConfigurationError

DEFAULT_TIMEOUT_MILLIS = 5000

# Fields holding image payloads; never carried onto a result
BINARY_FIELDS = frozenset({"binary_data", "base64_data"})


class UploadConfig(BaseModel):
    """Configuration for one upload batch.

    Accepts both the snake_case names and the camelCase / short keys a host
    stores (``url``, ``jsonPath``, ``timeout``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    endpoint_url: str = Field(
        min_length=1,
        validation_alias=AliasChoices("endpoint_url", "endpointUrl", "url"),
    )
    response_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("response_path", "responsePath", "jsonPath"),
    )
    timeout_millis: PositiveInt = Field(
        default=DEFAULT_TIMEOUT_MILLIS,
        validation_alias=AliasChoices("timeout_millis", "timeoutMillis", "timeout"),
    )

    @classmethod
    def from_host(cls, raw: Optional[Mapping[str, Any]], key: str = "") -> "UploadConfig":
        """Validate a raw host configuration mapping."""
        if not raw:
            raise ConfigMissingError(key)
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid uploader config: {exc}") from exc


class ImageItem(BaseModel):
    """Represents an image to be uploaded.

    Keys other than the declared fields are kept as pass-through metadata
    and copied onto the result.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    binary_data: Optional[bytes] = Field(
        default=None, validation_alias=AliasChoices("binary_data", "buffer")
    )
    base64_data: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("base64_data", "base64Image")
    )
    source_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("source_url", "url")
    )
    file_name: str = Field(
        default="", validation_alias=AliasChoices("file_name", "fileName")
    )

    @property
    def metadata(self) -> Dict[str, Any]:
        """Pass-through metadata fields."""
        return dict(self.model_extra or {})


class ResultItem(BaseModel):
    """Result of uploading a single image."""

    model_config = ConfigDict(extra="allow")

    file_name: str = ""
    source_url: Optional[str] = None
    result_url: str = ""
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return bool(self.result_url) and self.error_message is None

    @classmethod
    def from_item(
        cls,
        item: ImageItem,
        result_url: str = "",
        error_message: Optional[str] = None,
    ) -> "ResultItem":
        """Build a result from an item, dropping its binary payload."""
        data = item.model_dump(exclude=set(BINARY_FIELDS))
        data["result_url"] = result_url
        data["error_message"] = error_message
        return cls(**data)


@dataclass
class UploadRequest:
    """An outbound HTTP request."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout_millis: Optional[int] = None


@dataclass
class TransportResponse:
    """Status and raw body returned by a transport."""

    status_code: int
    content: bytes = b""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class TaskState(Enum):
    """States of a single upload task."""

    RESOLVING_BYTES = "resolving_bytes"
    UPLOADING = "uploading"
    EXTRACTING_RESULT = "extracting_result"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (TaskState.SUCCEEDED, TaskState.FAILED)


@dataclass(frozen=True)
class TaggedOutcome:
    """Terminal outcome of a task, tagged with the item's position in the batch."""

    original_index: int
    payload: ResultItem
    state: TaskState

    @property
    def succeeded(self) -> bool:
        return self.state is TaskState.SUCCEEDED
