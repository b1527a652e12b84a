"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from the environment or a .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    database_url: str = "sqlite+aiosqlite:///./library.db"
    database_echo: bool = False

    # Server
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 5036
    log_level: str = "INFO"

    # OpenTelemetry
    otel_enabled: bool = False
    otel_service_name: str = "library-catalog"
    otel_exporter_otlp_endpoint: str = "http://localhost:4318/v1/traces"
    otel_exporter_otlp_protocol: str = "http"
    otel_console_export: bool = False

    @property
    def is_development(self) -> bool:
        """Whether the app runs in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Return the cached application settings."""
    return Settings()
