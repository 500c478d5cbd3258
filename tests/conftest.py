"""
Shared pytest fixtures for Nucleus tests.

This module provides common fixtures including:
- FakeClock: deterministic wall clock for the credential rotator
- Redis mocks for the member count store
- A fully wired client and FastAPI test app
"""

import os
import sys
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nucleus.client import build_client
from nucleus.config import EnvConfigProvider, load_settings
from nucleus.modules.auth import CredentialRotator

SECRET = "s3cr3t"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> datetime:
        self.now = now
        return self.now


@pytest.fixture
def clock():
    """Clock fixed at day 10, 14:05:30 UTC."""
    return FakeClock(datetime(2024, 6, 10, 14, 5, 30, tzinfo=UTC))


@pytest.fixture
def environ():
    """Environment mapping holding the shared secret."""
    return {"NUCLEUS_AUTH": SECRET}


@pytest.fixture
def rotator(clock, environ):
    """Rotator reading the secret from the fake environment."""
    return CredentialRotator(secret_env="NUCLEUS_AUTH", clock=clock, environ=environ)


@pytest.fixture
def redis_mock():
    """Create a mock Redis client."""
    redis = AsyncMock()
    redis.zadd = AsyncMock(return_value=1)
    redis.zrevrange = AsyncMock(return_value=[])
    redis.zrevrangebyscore = AsyncMock(return_value=[])
    redis.zrangebyscore = AsyncMock(return_value=[])
    redis.zcount = AsyncMock(return_value=0)
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    return redis


@pytest.fixture
def settings():
    """Settings built from an empty environment (all defaults)."""
    return load_settings(EnvConfigProvider({}))


@pytest.fixture
def nucleus_client(settings, redis_mock, rotator):
    """Fully wired client with mocked storage and a fixed clock."""
    return build_client(settings, redis_mock, rotator=rotator)
