"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        RATEBOOK_DB_HOST: Database host (default: localhost)
        RATEBOOK_DB_PORT: Database port (default: 5432)
        RATEBOOK_DB_DATABASE: Database name (default: ratebook)
        RATEBOOK_DB_USERNAME: Database user (default: ratebook)
        RATEBOOK_DB_PASSWORD: Database password (required in production)
        RATEBOOK_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        RATEBOOK_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        RATEBOOK_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="RATEBOOK_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="ratebook", description="Database name")
    username: str = Field(default="ratebook", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class PricingSettings(BaseSettings):
    """Pricing engine settings.

    Environment variables:
        RATEBOOK_PRICING_DEFAULT_QUANTITY: Quantity assumed when a quote
            request omits it (default: 1)
        RATEBOOK_PRICING_MAX_QUANTITY: Largest quantity a quote accepts
            (default: 1000000000)
    """

    model_config = SettingsConfigDict(
        env_prefix="RATEBOOK_PRICING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_quantity: Decimal = Field(
        default=Decimal("1"),
        description="Quantity used when a quote request omits it",
        gt=0,
    )
    max_quantity: Decimal = Field(
        default=Decimal("1000000000"),
        description="Largest quantity accepted by the quote endpoint",
        gt=0,
    )

    @model_validator(mode="after")
    def validate_quantity_bounds(self) -> "PricingSettings":
        """Validate default quantity does not exceed the maximum."""
        if self.default_quantity > self.max_quantity:
            raise ValueError(
                f"default_quantity ({self.default_quantity}) must be <= "
                f"max_quantity ({self.max_quantity})"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="RATEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Ratebook API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def pricing(self) -> PricingSettings:
        """Get pricing settings."""
        return get_pricing_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_pricing_settings() -> PricingSettings:
    """Get cached pricing settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return PricingSettings()
