"""
Configuration models for the order data generator service.

These models define the structure and validation for the config.json file.
Every field has a default, so an empty JSON object is a valid configuration.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
]


class CacheConfig(BaseModel):
    """Configuration for the orders query cache."""

    enabled: bool = Field(True, description="Memoize generated order result sets")
    max_entries: int = Field(
        128, gt=0, description="Maximum number of cached result sets"
    )
    ttl_seconds: float = Field(
        300.0, gt=0.0, description="Seconds a cached result set stays valid"
    )


class ApiConfig(BaseModel):
    """Configuration for the HTTP API."""

    default_page_size: int = Field(
        25, gt=0, description="Rows per orders table page when not specified"
    )
    max_page_size: int = Field(500, gt=0, description="Largest allowed page size")
    max_range_days: int = Field(
        366, gt=0, description="Longest date range a single request may ask for"
    )
    allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS),
        description="CORS origins (overridden by ALLOWED_ORIGINS env var)",
    )

    @field_validator("allowed_origins")
    @classmethod
    def strip_origins(cls, v: list[str]) -> list[str]:
        """Drop blank origins and surrounding whitespace."""
        return [origin.strip() for origin in v if origin and origin.strip()]

    @model_validator(mode="after")
    def validate_page_sizes(self):
        """Ensure the default page size fits within the maximum."""
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) cannot exceed "
                f"max_page_size ({self.max_page_size})"
            )
        return self

    def get_allowed_origins(self) -> list[str]:
        """
        Get CORS origins from the appropriate source.

        The ALLOWED_ORIGINS environment variable (comma-separated) takes
        priority over the configuration file.
        """
        env_origins = os.getenv("ALLOWED_ORIGINS")
        if env_origins:
            return [o.strip() for o in env_origins.split(",") if o.strip()]
        return list(self.allowed_origins)


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    level: str = Field("INFO", description="Root log level")
    json_messages: bool = Field(
        True, description="Emit JSON structured request logs"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate that the level is a standard logging level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class DashboardConfig(BaseModel):
    """Main configuration model for the order data generator service."""

    cache: CacheConfig = Field(
        default_factory=CacheConfig, description="Orders query cache settings"
    )
    api: ApiConfig = Field(default_factory=ApiConfig, description="HTTP API settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging settings"
    )

    @classmethod
    def from_file(cls, file_path: str | Path) -> "DashboardConfig":
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to the configuration JSON file

        Returns:
            DashboardConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON is invalid or doesn't match the schema
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with path.open("r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        logger.debug(f"Loaded configuration from {path}")
        return cls(**data)

    def to_file(self, file_path: str | Path) -> None:
        """
        Save configuration to a JSON file.

        Args:
            file_path: Path where to save the configuration file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w") as f:
            json.dump(self.model_dump(), f, indent=2)
