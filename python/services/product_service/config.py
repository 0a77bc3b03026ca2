"""
Service configuration.

Loads settings from environment variables and an optional .env file.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Product service settings.

    Attributes:
        service_name: Name reported by the health endpoint.
        version: API version string.
        environment: Deployment environment. ``development`` attaches
            error detail to failure responses.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        cors_origins: Origins allowed by the cross-origin policy.
        static_dir: Front-end directory served at ``/`` when it exists.
        host: Bind address for the server entry point.
        port: Bind port for the server entry point.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    service_name: str = "product-service"
    version: str = "0.3.0"
    environment: str = "production"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    static_dir: str = "public"
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def dev_mode(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
