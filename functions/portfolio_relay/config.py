"""
Configuration and settings for the relay service.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

WAKATIME_SUMMARIES_URL = (
    "https://wakatime.com/api/v1/users/current/summaries?range=last_7_days"
)


class Settings(BaseSettings):
    """Environment-backed settings, read once at startup and never mutated."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    # Outbound mail account (also the contact form recipient)
    email_user: Optional[str] = Field(default=None, env="EMAIL_USER")
    email_pass: Optional[str] = Field(default=None, env="EMAIL_PASS")
    smtp_host: str = Field(default="smtp.gmail.com", env="SMTP_HOST")
    smtp_port: int = Field(default=587, env="SMTP_PORT")

    # Google Analytics (service-account key mounted as a secret file)
    ga_key_path: str = Field(default="/etc/secrets/key.json", env="GA_KEY_PATH")
    ga_property_id: Optional[str] = Field(default=None, env="GA_PROPERTY_ID")

    # WakaTime
    wakatime_api_key: Optional[str] = Field(default=None, env="WAKATIME_API_KEY")
    wakatime_summaries_url: str = Field(
        default=WAKATIME_SUMMARIES_URL, env="WAKATIME_SUMMARIES_URL"
    )

    # HTTP server
    # Comma-separated (`https://a,https://b`) or a JSON list.
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["*"], env="CORS_ORIGINS"
    )
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=5000, env="PORT")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [origin.strip() for origin in value.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
