"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NPM_REGISTRY_URL = "https://registry.npmjs.org"


class Settings(BaseSettings):
    """Settings for the dependency checker."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: str | None = None
    npm_registry_url: str = NPM_REGISTRY_URL
    # GitHub code search allows 30 req/min for authenticated users; stay one under
    requests_per_minute: int = Field(default=29, gt=0)
    rate_limit_burst: int = Field(default=1, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
