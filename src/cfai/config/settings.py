"""Application settings loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "CFAI_"}

    cloudflare_api_token: str | None = Field(
        default=None, description="Cloudflare API token (preferred)"
    )
    cloudflare_email: str | None = Field(
        default=None, description="Account email for global API key auth"
    )
    cloudflare_api_key: str | None = Field(
        default=None, description="Global API key, used together with the email"
    )
    cloudflare_api_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Cloudflare API base URL",
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Cloudflare request timeout in seconds"
    )
    ai_api_key: str | None = Field(default=None, description="AI API key")
    ai_api_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible API base URL",
    )
    ai_model: str = Field(default="gpt-4o", description="AI model name")
    ai_max_tokens: int = Field(default=4096, gt=0, description="Max completion tokens")
    ai_temperature: float = Field(
        default=0.7, ge=0.0, le=2.0, description="Sampling temperature"
    )
    ai_timeout: float = Field(default=120.0, gt=0, description="AI request timeout in seconds")
    default_domain: str | None = Field(
        default=None, description="Domain used when --domain is omitted"
    )
    db_path: Path = Field(
        default=Path.home() / ".cfai" / "history.db",
        description="SQLite audit log path",
    )
    log_level: str = Field(default="WARNING", description="Logging level")

    @property
    def has_cloudflare_credentials(self) -> bool:
        if self.cloudflare_api_token:
            return True
        return bool(self.cloudflare_email and self.cloudflare_api_key)
