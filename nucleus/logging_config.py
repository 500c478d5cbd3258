"""
Logging configuration for the Nucleus API and the uvicorn server.

Everything goes to stdout. Uvicorn access lines for the health check routes are
dropped; access lines for /api routes are kept.
"""

import logging
import logging.config
from typing import Any, Dict, Iterable, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Liveness/health routes polled by the orchestrator
QUIET_PATHS = frozenset({"/health", "/healthz"})


class QuietPathFilter(logging.Filter):
    """Drop uvicorn access records for GET requests to the given paths."""

    def __init__(self, paths: Optional[Iterable[str]] = None):
        super().__init__()
        self.paths = frozenset(paths) if paths is not None else QUIET_PATHS

    @staticmethod
    def _request_line(record: logging.LogRecord):
        # uvicorn passes (client_addr, method, path, http_version, status)
        if isinstance(record.args, tuple) and len(record.args) >= 3:
            return str(record.args[1]), str(record.args[2])

        parts = record.getMessage().split('"')
        if len(parts) >= 2:
            request = parts[1].split()
            if len(request) >= 2:
                return request[0], request[1]
        return None, None

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True

        method, path = self._request_line(record)
        if method != "GET" or path is None:
            return True
        return path.split("?", 1)[0] not in self.paths


def _logger(handler: str, level: str) -> Dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build the dictConfig for the service.

    Args:
        level: LOG_LEVEL value, applied to the nucleus and uvicorn loggers

    Returns:
        Dictionary accepted by logging.config.dictConfig
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"quiet_paths": {"()": QuietPathFilter}},
        "formatters": {
            "default": {"format": DEFAULT_FORMAT},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["quiet_paths"],
            },
        },
        "loggers": {
            "nucleus": _logger("default", level),
            "uvicorn": _logger("default", level),
            "uvicorn.error": _logger("default", level),
            "uvicorn.access": _logger("access", level),
        },
        "root": {"level": "WARNING", "handlers": ["default"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the service logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
