"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass
class APIConfig:
    """API configuration."""
    host: str
    port: int
    debug: bool


@dataclass
class AuthConfig:
    """Rotating credential configuration."""
    secret_env: str
    use_utc: bool


@dataclass
class StorageConfig:
    """Storage configuration."""
    redis_url: str


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass
class Settings:
    """Complete application settings."""
    api: APIConfig
    auth: AuthConfig
    storage: StorageConfig
    logging: LoggingConfig


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration."""
        ...

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        ...


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize provider.

        Args:
            environ: Mapping to read from. Defaults to os.environ.
        """
        self._env = os.environ if environ is None else environ

    def _get(self, key: str, default: str) -> str:
        return self._env.get(key) or default

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        port = self._get("API_PORT", "8080")
        try:
            port_number = int(port)
        except ValueError:
            raise ValueError(f"API_PORT must be an integer, got {port!r}") from None

        return APIConfig(
            host=self._get("API_HOST", "0.0.0.0"),
            port=port_number,
            debug=_flag(self._get("API_DEBUG", "false")),
        )

    def get_auth_config(self) -> AuthConfig:
        """
        Get authentication configuration from environment variables.

        The secret itself is not loaded here. Only the name of the variable
        holding it is, so the rotator can re-read it on every rotation.
        """
        return AuthConfig(
            secret_env=self._get("NUCLEUS_AUTH_ENV", "NUCLEUS_AUTH"),
            use_utc=_flag(self._get("NUCLEUS_AUTH_UTC", "false")),
        )

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        return StorageConfig(redis_url=self._get("REDIS_URL", "redis://localhost:6379/0"))

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig(level=self._get("LOG_LEVEL", "INFO").upper())


def load_settings(provider: Optional[ConfigProvider] = None) -> Settings:
    """Collect all configuration sections from a provider."""
    provider = provider or EnvConfigProvider()
    return Settings(
        api=provider.get_api_config(),
        auth=provider.get_auth_config(),
        storage=provider.get_storage_config(),
        logging=provider.get_logging_config(),
    )
