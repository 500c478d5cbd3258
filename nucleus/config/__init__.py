"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: EnvConfigProvider, Settings, load_settings()
Hidden: Environment parsing, defaults

Can be replaced with any other provider that satisfies ConfigProvider.
"""

from .provider import (
    APIConfig,
    AuthConfig,
    ConfigProvider,
    EnvConfigProvider,
    LoggingConfig,
    Settings,
    StorageConfig,
    load_settings,
)

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "LoggingConfig",
    "Settings",
    "StorageConfig",
    "load_settings",
]
