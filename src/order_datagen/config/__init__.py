"""Configuration models and loaders for the order data generator."""

from .models import ApiConfig, CacheConfig, DashboardConfig, LoggingConfig
from .settings import get_config_from_env, load_config, load_config_with_fallback

__all__ = [
    "ApiConfig",
    "CacheConfig",
    "DashboardConfig",
    "LoggingConfig",
    "load_config",
    "get_config_from_env",
    "load_config_with_fallback",
]
