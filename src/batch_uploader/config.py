from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.models import DEFAULT_TIMEOUT_MILLIS, UploadConfig

DEFAULT_ENDPOINT_URL = "https://p.sda1.dev/api/v1/upload_external_noform?filename="
DEFAULT_RESPONSE_PATH = "data.url"
DEFAULT_CONFIG_KEY = "picBed.sda1"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BATCH_UPLOADER_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    response_path: Optional[str] = DEFAULT_RESPONSE_PATH
    timeout_millis: int = DEFAULT_TIMEOUT_MILLIS
    config_key: str = DEFAULT_CONFIG_KEY

    def upload_config(self, **overrides: object) -> UploadConfig:
        """UploadConfig from these settings, with non-None overrides applied."""
        values = {
            "endpoint_url": self.endpoint_url,
            "response_path": self.response_path,
            "timeout_millis": self.timeout_millis,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return UploadConfig.from_host(values)


settings = Settings()
