"""
Tests for the environment configuration provider and logging config.
"""

import logging

import pytest

from nucleus.config import EnvConfigProvider, load_settings
from nucleus.logging_config import QuietPathFilter, get_logging_config


def test_defaults():
    settings = load_settings(EnvConfigProvider({}))

    assert settings.api.host == "0.0.0.0"
    assert settings.api.port == 8080
    assert settings.api.debug is False
    assert settings.auth.secret_env == "NUCLEUS_AUTH"
    assert settings.auth.use_utc is False
    assert settings.storage.redis_url == "redis://localhost:6379/0"
    assert settings.logging.level == "INFO"


def test_overrides():
    provider = EnvConfigProvider(
        {
            "API_PORT": "9000",
            "API_DEBUG": "true",
            "NUCLEUS_AUTH_ENV": "BOT_SECRET",
            "NUCLEUS_AUTH_UTC": "1",
            "REDIS_URL": "redis://cache:6379/2",
            "LOG_LEVEL": "debug",
        }
    )
    settings = load_settings(provider)

    assert settings.api.port == 9000
    assert settings.api.debug is True
    assert settings.auth.secret_env == "BOT_SECRET"
    assert settings.auth.use_utc is True
    assert settings.storage.redis_url == "redis://cache:6379/2"
    assert settings.logging.level == "DEBUG"


def test_invalid_port():
    with pytest.raises(ValueError, match="API_PORT"):
        EnvConfigProvider({"API_PORT": "eighty"}).get_api_config()


def test_secret_is_not_part_of_settings():
    settings = load_settings(EnvConfigProvider({"NUCLEUS_AUTH": "s3cr3t"}))

    assert "s3cr3t" not in repr(settings)


def test_logging_config_level_applies_to_uvicorn():
    config = get_logging_config("debug")

    for name in ("nucleus", "uvicorn", "uvicorn.error", "uvicorn.access"):
        assert config["loggers"][name]["level"] == "DEBUG"
    assert config["handlers"]["access"]["filters"] == ["quiet_paths"]


ACCESS_FORMAT = '%s - "%s %s HTTP/%s" %d'


def _access(method: str, path: str, status: int = 200) -> logging.LogRecord:
    return logging.LogRecord(
        "uvicorn.access", logging.INFO, __file__, 1, ACCESS_FORMAT,
        ("127.0.0.1:5000", method, path, "1.1", status), None,
    )


def test_quiet_path_filter_drops_health_routes():
    quiet = QuietPathFilter()

    assert quiet.filter(_access("GET", "/health")) is False
    assert quiet.filter(_access("GET", "/healthz")) is False
    assert quiet.filter(_access("GET", "/health?verbose=1")) is False


def test_quiet_path_filter_keeps_api_routes():
    quiet = QuietPathFilter()

    assert quiet.filter(_access("GET", "/api/commands")) is True
    assert quiet.filter(_access("POST", "/api/commands/ping")) is True
    assert quiet.filter(_access("GET", "/api/health-report")) is True
    assert quiet.filter(_access("POST", "/health")) is True


def test_quiet_path_filter_parses_preformatted_message():
    quiet = QuietPathFilter()
    record = logging.LogRecord(
        "uvicorn.access", logging.INFO, __file__, 1, '127.0.0.1 - "GET /healthz HTTP/1.1" 200', None, None
    )

    assert quiet.filter(record) is False


def test_quiet_path_filter_ignores_other_loggers():
    record = logging.LogRecord("nucleus.main", logging.INFO, __file__, 1, "GET /health", None, None)

    assert QuietPathFilter().filter(record) is True
