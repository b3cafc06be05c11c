"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///:memory:"
    """Connection URL; its backend is used when no dialect is given explicitly."""

    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    # Relevance search
    SEARCH_DIALECT: str | None = None
    """Dialect override (e.g. "mysql", "pgsql", "sqlsrv")."""

    SEARCH_THRESHOLD_DIVISOR: float = Field(default=4.0, gt=0)
    """Default threshold is the sum of column weights divided by this."""

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    def get_dialect_name(self) -> str:
        """Get the configured dialect, falling back to the DATABASE_URL backend."""
        if self.SEARCH_DIALECT:
            return self.SEARCH_DIALECT
        return make_url(self.DATABASE_URL).get_backend_name()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
