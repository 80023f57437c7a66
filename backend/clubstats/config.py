"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./club.db",
        description="Database connection URL"
    )
    database_pool_size: int = Field(
        default=5,
        ge=1,
        description="Async connection pool size (PostgreSQL only)"
    )
    create_tables: bool = Field(
        default=False,
        description="Create club tables on startup (local development)"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins (dashboard frontend)"
    )

    # === Analytics ===
    most_improved_window: int = Field(
        default=3,
        ge=1,
        description="Competitions per window when comparing most improved"
    )
    competitor_list_limit: int = Field(
        default=50,
        ge=1,
        description="Maximum rows in the competitors overview"
    )

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
