"""Client configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings read from CATALOG_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", extra="ignore")

    api_url: str = "http://localhost:5036"
    timeout: float = 10.0


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
