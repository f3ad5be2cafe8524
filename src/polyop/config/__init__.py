"""Configuration management for polyop.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Tolerance and validation settings for operations
- LoggingConfig: Logging settings
- PolyopSettings: Main application settings
"""

from polyop.config.settings import (
    DEFAULT_TOLERANCE,
    GeometryConfig,
    LoggingConfig,
    PolyopSettings,
    get_default_settings,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "GeometryConfig",
    "LoggingConfig",
    "PolyopSettings",
    "get_default_settings",
]
