"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from MEALGRID_* environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="MealGrid", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/mealgrid",
        description="SQLAlchemy connection URL (PostgreSQL or SQLite)",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Identity provider (JWT issued by the external auth service)
    jwt_secret: str = Field(
        default="change-me", description="Shared secret used to verify access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="Access token algorithm")
    jwt_audience: Optional[str] = Field(
        default="authenticated", description="Expected audience claim, if any"
    )

    # Object storage
    storage_root: str = Field(
        default="./storage", description="Directory backing the object store"
    )
    storage_bucket: str = Field(
        default="recipe-images", description="Bucket holding recipe photos"
    )
    storage_public: bool = Field(
        default=False, description="Whether objects are reachable without a signature"
    )
    storage_base_url: str = Field(
        default="http://localhost:8000", description="Base URL used to build object URLs"
    )
    signed_url_ttl_sec: int = Field(
        default=60 * 60, ge=1, description="Lifetime of signed image URLs"
    )

    # Recipe limits
    max_tags: int = Field(default=12, ge=1, description="Maximum tags kept per recipe")
    max_source_urls: int = Field(
        default=12, ge=1, description="Maximum source links kept per recipe"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(default="MealGrid API", description="API documentation title")
    api_description: str = Field(
        default="Recipes, weekly meal plans and grocery lists",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_prefix="MEALGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
