"""
Configuration module for destination search.

This module provides centralized configuration management using Pydantic settings.
All configuration values can be overridden via environment variables or .env file.
"""

from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATASET_PATH = Path(__file__).parent / "data" / "database.json"


class Settings(BaseSettings):
    """
    Application settings for destination search.

    All settings can be configured via environment variables.
    Settings are validated on instantiation to ensure correct configuration.

    Attributes:
        DATASET_URL: HTTP(S) URL or local path of the destination dataset
        DATASET_GROUPS: Top-level dataset groups flattened into records
        MATCH_THRESHOLD: Maximum fuzzy distance accepted (0 = exact, 1 = anything)
        DEBOUNCE_SECONDS: Delay after the last keystroke before searching
        MIN_QUERY_LENGTH: Minimum normalized query length that triggers a search
        TOP_N: Number of result cards rendered
        PLACEHOLDER_IMAGE: Image shown when a destination has none
        REQUEST_TIMEOUT: Timeout for the dataset HTTP fetch in seconds
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_JSON: Emit JSON structured logs instead of human-readable lines
    """

    APP_NAME: str = Field(
        default="Destination Search",
        description="Display name for the application",
    )

    # Dataset
    DATASET_URL: str = Field(
        default=str(DEFAULT_DATASET_PATH),
        description="HTTP(S) URL or filesystem path of the dataset JSON",
    )
    DATASET_GROUPS: List[str] = Field(
        default=["countries", "temples", "beaches"],
        description="Dataset groups flattened into the record collection",
    )

    # Matching and ranking
    MATCH_THRESHOLD: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Maximum fuzzy match distance",
    )
    TOP_N: int = Field(
        default=2,
        ge=1,
        le=50,
        description="Number of results rendered",
    )

    # Input handling
    DEBOUNCE_SECONDS: float = Field(
        default=0.3,
        ge=0.0,
        le=5.0,
        description="Debounce delay in seconds",
    )
    MIN_QUERY_LENGTH: int = Field(
        default=3,
        ge=1,
        description="Minimum normalized query length",
    )

    # Rendering
    PLACEHOLDER_IMAGE: str = Field(
        default="images/placeholder.png",
        description="Fallback image for destinations without one",
    )

    # HTTP client configuration
    REQUEST_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        le=60.0,
        description="Timeout for dataset HTTP requests in seconds",
    )

    # Server configuration
    HOST: str = Field(default="0.0.0.0", description="Server bind address")
    PORT: int = Field(default=8000, ge=1, le=65535, description="Server port number")
    CORS_ORIGINS: str = Field(default="*", description="Comma-separated CORS origins")

    # Logging configuration
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Use JSON structured logging",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DATASET_URL")
    @classmethod
    def validate_dataset_url(cls, value: str) -> str:
        """
        Validate the dataset location.

        Args:
            value: URL or path to validate

        Returns:
            The stripped location

        Raises:
            ValueError: If the location is empty
        """
        value = value.strip()
        if not value:
            raise ValueError("Dataset location cannot be empty")
        return value

    @field_validator("DATASET_GROUPS")
    @classmethod
    def validate_groups(cls, value: List[str]) -> List[str]:
        """Reject an empty group list."""
        groups = [group.strip() for group in value if group and group.strip()]
        if not groups:
            raise ValueError("At least one dataset group is required")
        return groups

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
