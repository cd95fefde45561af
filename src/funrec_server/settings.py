"""Service configuration."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(ENV_FILE, override=False)


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FUNREC_", env_file=str(ENV_FILE), extra="ignore", populate_by_name=True
    )

    host: str = "0.0.0.0"
    port: int = Field(default=2022, validation_alias=AliasChoices("PORT", "FUNREC_PORT"))

    geoapify_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEOAPIFY_API_KEY", "FUNREC_GEOAPIFY_API_KEY"),
    )
    # Identity key handed to the hosting agent framework.
    service_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DAIN_API_KEY", "FUNREC_SERVICE_API_KEY"),
    )

    geoapify_base_url: str = "https://api.geoapify.com/v2"
    places_categories: str = "tourism,leisure"
    places_limit: int = Field(default=10, ge=1, le=20)
    request_timeout_s: float = 8.0
    log_level: str = "INFO"

    def require_provider_key(self) -> str:
        if not self.geoapify_api_key:
            raise ConfigError("GEOAPIFY_API_KEY is not set")
        return self.geoapify_api_key


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    return ServiceSettings()
