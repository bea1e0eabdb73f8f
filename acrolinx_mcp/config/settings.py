"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for the tool gateway and Acrolinx workflow client.

    Environment variable names map directly to field names in uppercase.
    Example: `acrolinx_api_key` reads from `ACROLINX_API_KEY`.

    Attributes:
        acrolinx_api_key: API key sent as the `Authorization` header.
        acrolinx_base_url: Base URL of the Acrolinx NextGen API.
        max_text_length: Maximum accepted text length in characters.
        workflow_timeout: Overall polling deadline in milliseconds.
        poll_interval: Delay between status polls in milliseconds.
        max_retries: Attempts per remote call before giving up.
        retry_base_delay_ms: Base delay for exponential retry backoff.
        request_timeout_seconds: HTTP request timeout in seconds.
        continue_on_poll_error: Keep polling after a failed status check.
        debug: Emit debug logs and append raw payloads to reports.
        shutdown_grace_seconds: Time granted to in-flight invocations on shutdown.
        application_host: Host interface for the HTTP surface.
        application_port: Port for the HTTP surface.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    acrolinx_api_key: str = Field(min_length=1)
    acrolinx_base_url: str = Field(default="https://app.acrolinx.cloud", min_length=1)
    max_text_length: int = Field(default=100000, ge=1)
    workflow_timeout: int = Field(default=60000, ge=0)
    poll_interval: int = Field(default=2000, ge=0)
    max_retries: int = Field(default=3, ge=1)
    retry_base_delay_ms: int = Field(default=1000, ge=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    continue_on_poll_error: bool = Field(default=True)
    debug: bool = Field(default=False)
    shutdown_grace_seconds: float = Field(default=10.0, ge=0)
    application_host: str = Field(default="127.0.0.1")
    application_port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("acrolinx_api_key", "acrolinx_base_url")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("acrolinx_base_url")
    @classmethod
    def _validate_base_url_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("acrolinx_base_url must start with http:// or https://")
        return value.rstrip("/")


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
