"""Unified settings for the payment schema tooling.

Values are read from the environment or a .env file next to this package.
Only the PostgreSQL URL is required.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Package directory (for .env file location)
_PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Settings loaded from .env file or environment."""

    model_config = SettingsConfigDict(
        env_file=_PACKAGE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === PostgreSQL ===
    postgres_url: str = Field(
        description="PostgreSQL async connection URL (postgresql+asyncpg://...)"
    )
    postgres_pool_size: int = Field(
        default=5,
        description="Connection pool size",
        ge=1,
    )
    postgres_max_overflow: int = Field(
        default=10,
        description="Max pool overflow connections",
        ge=0,
    )

    # === Schema apply ===
    seed_programs: bool = Field(
        default=True,
        description="Insert the static program catalog when applying the schema",
    )

    @field_validator("postgres_url", mode="before")
    @classmethod
    def require_url(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("POSTGRES_URL must be specified in .env file")
        return str(v).strip()

    @property
    def alembic_url(self) -> str:
        """URL handed to Alembic (same async driver as the app)."""
        return self.postgres_url


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
