"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CACHE_DIR = Path.home() / ".cache/github-repo-scanner"


class Settings(BaseSettings):
    """Settings for the repository scanner."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: str | None = None
    # Replaces every scanned repo's default branch when set (the bulk
    # /repositories endpoint does not report it)
    default_branch: str | None = None
    per_page: int = 100
    cache_dir: Path = DEFAULT_CACHE_DIR


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
