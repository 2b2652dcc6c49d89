"""Application configuration using Pydantic Settings."""

from decimal import Decimal
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # CORS Settings
    allowed_origins: str = Field(
        default="http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # Database Configuration (Supabase Direct Connection)
    db_user: str = Field(..., description="Database user")
    db_password: str = Field(..., description="Database password")
    db_host: str = Field(..., description="Database host")
    db_port: int = Field(default=5432, description="Database port")
    db_name: str = Field(..., description="Database name")
    database_url_override: Optional[str] = Field(
        default=None,
        alias="database_url",
        description="Full SQLAlchemy async URL, replaces the Supabase connection"
    )

    db_ssl_mode: Optional[str] = Field(
        default=None,
        description=(
            "asyncpg SSL mode. Defaults to require for the Supabase connection "
            "and to none for a DATABASE_URL override"
        )
    )

    # Celery broker
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis URL for Celery broker and result backend"
    )

    # External APIs
    github_token: str = Field(
        default="",
        description="GitHub token for commit activity lookups (optional)"
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL"
    )

    # Betting Configuration
    initial_wallet_balance: int = Field(
        default=1000,
        description="HackCoins granted to a new user"
    )
    bet_placement_xp: int = Field(
        default=5,
        description="XP awarded for each placed bet"
    )
    settlement_unplaced_multiplier: Decimal = Field(
        default=Decimal("0.9"),
        ge=0,
        description="Payout multiplier for teams that finish 4th or worse or do not place"
    )
    odds_rating_jitter: float = Field(
        default=5.0,
        ge=0,
        description="Maximum random rating variation applied when calculating odds"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Observability
    logfire_token: str = Field(
        default="",
        description="Logfire observability token"
    )

    # Application Limits
    pagination_max_limit: int = Field(
        default=100,
        description="Maximum pagination limit"
    )
    pagination_default_limit: int = Field(
        default=20,
        description="Default pagination limit"
    )

    @field_validator("allowed_origins")
    @classmethod
    def parse_origins(cls, v: str) -> List[str]:
        """Parse comma-separated origins into a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("db_host")
    @classmethod
    def validate_db_host(cls, v: str) -> str:
        """Validate that the database host is provided."""
        if not v.strip():
            raise ValueError("Database host cannot be empty")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"

    @property
    def database_url(self) -> str:
        """
        Construct the SQLAlchemy async database URL for Supabase direct connection.
        Uses the asyncpg driver; DATABASE_URL replaces it entirely when set.
        """
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}@"
            f"{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def database_ssl(self) -> Optional[str]:
        """asyncpg ssl argument for the configured database, None for plain TCP."""
        if self.db_ssl_mode:
            return self.db_ssl_mode
        if self.database_url_override:
            return None
        return "require"


# Create a singleton instance
settings = Settings()


def get_settings() -> "Settings":
    """
    Return the singleton settings instance.

    Provided for modules that import config.settings.get_settings
    instead of the settings variable.
    """
    return settings
