"""
Storage Module - Black Box Interface

Purpose: Persist guild member count samples
Interface: connect(), MemberCountStore.record(), latest(), latest_before(),
           earliest_since()
Hidden: Redis key layout, sample encoding

Can be replaced with any storage backend without affecting other modules.
"""

import redis.asyncio as redis

from .store import MemberCountSample, MemberCountStore


def connect(url: str) -> redis.Redis:
    """Create the Redis client used by the store."""
    return redis.from_url(url, encoding="utf-8", decode_responses=True)


__all__ = ["MemberCountSample", "MemberCountStore", "connect"]
