"""Client configuration using Pydantic Settings."""

from enum import StrEnum

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TIMEOUT = 30
DEFAULT_RETRY_COUNT = 4


class ApiUrl(StrEnum):
    """Opsgenie API endpoints."""

    DEFAULT = "https://api.opsgenie.com"
    EU = "https://api.eu.opsgenie.com"
    SANDBOX = "https://api.sandbox.opsgenie.com"


class ClientSettings(BaseSettings):
    """Opsgenie client settings from arguments or environment variables.

    Environment variables use the ``OPSGENIE_`` prefix, e.g.
    ``OPSGENIE_API_KEY`` or ``OPSGENIE_RETRY_COUNT``.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPSGENIE_",
        extra="ignore",
    )

    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Opsgenie API key (GenieKey), must not be blank",
    )
    api_url: str = Field(
        default=ApiUrl.DEFAULT.value,
        description="Opsgenie API base URL (see ApiUrl for the public endpoints)",
    )
    retry_count: int = Field(
        default=DEFAULT_RETRY_COUNT,
        ge=0,
        description="Additional attempts for transport errors, 429 and 5xx responses",
    )
    timeout: float = Field(
        default=TIMEOUT,
        gt=0,
        description="HTTP timeout per attempt in seconds",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format_json: bool = Field(
        default=True,
        description="Use JSON logging format (False for human-readable logs in development)",
    )

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
