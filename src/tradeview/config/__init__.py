"""Configuration package for tradeview."""

from .state import (
    ApiConfig,
    ConfigLoader,
    ConfigState,
    DatabaseConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    "ApiConfig",
    "ConfigLoader",
    "ConfigState",
    "DatabaseConfig",
    "LoggingConfig",
    "get_config",
]
