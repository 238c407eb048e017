"""Client configuration sourced from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    service_name: str = Field(default="", alias="SERVICE_NAME")
    use_tls: bool = Field(default=False, alias="SERVICE_USE_TLS")
    # Seconds
    request_timeout: float = Field(default=10.0, alias="SERVICE_REQUEST_TIMEOUT", gt=0.0)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


@lru_cache
def get_settings() -> ClientSettings:
    """Return cached settings instance."""

    return ClientSettings()  # type: ignore[call-arg]
