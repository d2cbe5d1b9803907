"""Configuration for Order Service."""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Order service configuration.

    All settings can be overridden via environment variables.
    """

    # Service configuration
    SERVICE_NAME: str = Field(default="order-service")
    SERVICE_HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=9090, ge=1, le=65535)
    ENV: str = Field(default="development")
    LOG_LEVEL: str = Field(default="info")

    # Storage backend ("memory" serves a seeded in-process catalog)
    STORAGE_BACKEND: Literal["postgres", "memory"] = Field(default="postgres")

    # Database
    DATABASE_URL: Optional[str] = Field(default=None)
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432, ge=1, le=65535)
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="postgres")
    DB_NAME: str = Field(default="order_service")
    DB_SSLMODE: str = Field(default="disable")
    DB_AUTO_CREATE_SCHEMA: bool = Field(default=False)

    # Connection pool
    DB_MAX_OPEN_CONNS: int = Field(default=25, ge=1)
    DB_MAX_IDLE_CONNS: int = Field(default=5, ge=0)
    DB_CONN_MAX_AGE: int = Field(default=300, ge=0)
    DB_COMMAND_TIMEOUT: float = Field(default=10.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """Connection string, assembled from DB_* parts unless DATABASE_URL is set."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgres://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}"
            f"/{self.DB_NAME}?sslmode={self.DB_SSLMODE}"
        )

    @property
    def pool_min_size(self) -> int:
        """Idle connections kept open, never above the open-connection cap."""
        return min(self.DB_MAX_IDLE_CONNS, self.DB_MAX_OPEN_CONNS)

    @property
    def is_development(self) -> bool:
        return self.ENV.lower() in ("development", "dev", "local")


settings = Settings()
