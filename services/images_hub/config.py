"""Configuration for the image hub HTTP service."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Aggregate page-size ceiling; each provider clamps further to its own maximum
MAX_PER_PAGE = 200
DEFAULT_PER_PAGE = 20


class Settings(BaseSettings):
    """Service settings loaded from IMAGES_HUB_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="IMAGES_HUB_", env_file=".env", extra="ignore"
    )

    # Header carrying the user ID set by the upstream identity gateway
    user_header: str = "X-User-Id"
    require_auth: bool = True

    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
