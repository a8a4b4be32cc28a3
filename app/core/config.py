"""Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ============ Application Settings ============
    APP_NAME: str = "Tripplan"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DESTINATION_NAME: str = "Tromsø"
    CURRENCY: str = "NOK"

    # ============ Server Settings ============
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # ============ CORS Settings ============
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins",
    )

    # ============ Database Settings ============
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "tripplan"
    POSTGRES_PASSWORD: str = "tripplan_password"
    POSTGRES_DB: str = "tripplan_db"
    DATABASE_URL_OVERRIDE: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; takes precedence over POSTGRES_* parts",
    )
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    @computed_field  # type: ignore[misc]
    @property
    def DATABASE_URL(self) -> str:
        """Construct the async database connection URL."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def database_url(self) -> str:
        """Get database URL as string for Alembic."""
        return str(self.DATABASE_URL)

    # ============ Redis Settings ============
    REDIS_ENABLED: bool = False
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None
    REDIS_DB: int = 0
    REDIS_MAX_CONNECTIONS: int = 10

    @computed_field  # type: ignore[misc]
    @property
    def REDIS_URL(self) -> str:
        """Construct Redis connection URL."""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # ============ OpenAI Settings ============
    OPENAI_API_KEY: str = Field(
        default="",
        description="OpenAI API Key; empty disables the AI generation path",
    )
    OPENAI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model to use",
    )
    OPENAI_MAX_TOKENS: int = Field(
        default=2000,
        description="Upper bound on completion tokens per plan",
    )
    OPENAI_TEMPERATURE: float = Field(
        default=0.7,
        description="Sampling temperature for plan generation",
    )

    # ============ Generation Settings ============
    GENERATION_TIMEOUT_SECONDS: float = Field(
        default=45.0,
        description="Deadline for the AI attempt before falling back to rules",
    )

    # ============ Sharing Settings ============
    SHARE_LINK_TTL_DAYS: int = Field(
        default=7,
        description="Days a shareable link stays readable",
    )

    # ============ Venue Directory Settings ============
    VENUE_DIRECTORY_URL: str = Field(
        default="",
        description="Companies directory endpoint; empty disables venue lookups",
    )
    VENUE_CACHE_TTL_SECONDS: int = Field(
        default=300,
        description="Lifetime of cached venue responses",
    )
    VENUE_CACHE_MAX_ENTRIES: int = 256

    # ============ Logging Settings ============
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
