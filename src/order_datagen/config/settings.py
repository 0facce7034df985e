"""
Configuration loading and management for the order data generator.

This module provides utilities for loading, validating, and managing
configuration settings.
"""

import logging
import os
from pathlib import Path

from .models import DashboardConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "ORDER_DATAGEN_CONFIG_FILE"

# Environment variable -> (section, field)
ENV_VARS = {
    "ORDER_DATAGEN_CACHE_ENABLED": ("cache", "enabled"),
    "ORDER_DATAGEN_CACHE_MAX_ENTRIES": ("cache", "max_entries"),
    "ORDER_DATAGEN_CACHE_TTL_SECONDS": ("cache", "ttl_seconds"),
    "ORDER_DATAGEN_DEFAULT_PAGE_SIZE": ("api", "default_page_size"),
    "ORDER_DATAGEN_MAX_PAGE_SIZE": ("api", "max_page_size"),
    "ORDER_DATAGEN_MAX_RANGE_DAYS": ("api", "max_range_days"),
    "ORDER_DATAGEN_LOG_LEVEL": ("logging", "level"),
}


def load_config(
    config_path: str | Path | None = None, config_name: str = "config.json"
) -> DashboardConfig:
    """
    Load configuration from file with intelligent path resolution.

    Args:
        config_path: Explicit path to config file or directory containing config
        config_name: Name of config file (default: "config.json")

    Returns:
        DashboardConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If no configuration file is found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        # Search in common locations
        search_paths = [
            Path.cwd() / config_name,
            Path.cwd() / "config" / config_name,
        ]

        for path in search_paths:
            if path.exists():
                config_path = path
                break
        else:
            raise FileNotFoundError(
                f"Configuration file '{config_name}' not found in any of: "
                f"{[str(p) for p in search_paths]}"
            )

    config_path = Path(config_path)

    # If path is a directory, look for config file inside it
    if config_path.is_dir():
        config_path = config_path / config_name

    return DashboardConfig.from_file(config_path)


def get_config_from_env() -> DashboardConfig | None:
    """
    Try to load configuration from environment variables.

    Returns:
        DashboardConfig if environment variables are set, None otherwise

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    config_file_env = os.getenv(CONFIG_FILE_ENV)
    if config_file_env:
        return load_config(config_file_env)

    env_values = {
        name: value for name in ENV_VARS if (value := os.getenv(name)) is not None
    }
    if not env_values:
        return None

    config_data: dict[str, dict[str, str]] = {}
    for name, value in env_values.items():
        section, field_name = ENV_VARS[name]
        config_data.setdefault(section, {})[field_name] = value

    # pydantic coerces the string values ("true", "64", "120.5")
    try:
        return DashboardConfig(**config_data)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid environment variable configuration: {e}")


def load_config_with_fallback(config_path: str | Path | None = None) -> DashboardConfig:
    """
    Load configuration with fallback to environment variables and defaults.

    Priority order:
    1. Explicit config file path
    2. Environment variable ORDER_DATAGEN_CONFIG_FILE
    3. Individual ORDER_DATAGEN_* environment variables
    4. Default locations (config.json, config/config.json)
    5. Built-in defaults

    Args:
        config_path: Optional explicit path to config file

    Returns:
        DashboardConfig: Loaded configuration
    """
    # Try explicit config path first
    if config_path:
        try:
            return load_config(config_path)
        except FileNotFoundError:
            logger.warning(f"Config file {config_path} not found; trying fallbacks")

    # Try environment variables
    try:
        env_config = get_config_from_env()
        if env_config:
            return env_config
    except (ValueError, FileNotFoundError) as e:
        logger.warning(f"Ignoring environment configuration: {e}")

    # Try default locations
    try:
        return load_config()
    except FileNotFoundError:
        pass

    logger.info("No configuration found, using built-in defaults")
    return DashboardConfig()
