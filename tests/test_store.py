"""
Tests for the member count store.
"""

from datetime import UTC, datetime

import pytest

from nucleus.modules.storage import MemberCountSample, MemberCountStore

NOON = datetime(2024, 6, 10, 12, 0, tzinfo=UTC)
NOON_MS = int(NOON.timestamp() * 1000)


@pytest.fixture
def store(redis_mock):
    return MemberCountStore(redis_mock)


@pytest.mark.asyncio
async def test_record_adds_scored_member(store, redis_mock):
    sample = await store.record("guild-1", 42, at=NOON)

    assert sample == MemberCountSample(count=42, at=NOON)
    redis_mock.zadd.assert_awaited_once_with(
        "member_count:guild-1", {f"{NOON_MS}:42": NOON.timestamp()}
    )


@pytest.mark.asyncio
async def test_record_rejects_negative_count(store, redis_mock):
    with pytest.raises(ValueError):
        await store.record("guild-1", -1)
    redis_mock.zadd.assert_not_awaited()


@pytest.mark.asyncio
async def test_latest_parses_sample(store, redis_mock):
    redis_mock.zrevrange.return_value = [f"{NOON_MS}:42"]

    sample = await store.latest("guild-1")

    assert sample == MemberCountSample(count=42, at=NOON)
    redis_mock.zrevrange.assert_awaited_once_with("member_count:guild-1", 0, 0)


@pytest.mark.asyncio
async def test_latest_handles_bytes(store, redis_mock):
    redis_mock.zrevrange.return_value = [f"{NOON_MS}:7".encode("utf-8")]

    sample = await store.latest("guild-1")

    assert sample.count == 7


@pytest.mark.asyncio
async def test_latest_empty(store, redis_mock):
    assert await store.latest("guild-1") is None


@pytest.mark.asyncio
async def test_latest_before_uses_exclusive_bound(store, redis_mock):
    await store.latest_before("guild-1", NOON)

    redis_mock.zrevrangebyscore.assert_awaited_once_with(
        "member_count:guild-1", f"({NOON.timestamp()}", "-inf", start=0, num=1
    )


@pytest.mark.asyncio
async def test_earliest_since(store, redis_mock):
    redis_mock.zrangebyscore.return_value = [f"{NOON_MS}:5"]

    sample = await store.earliest_since("guild-1", NOON)

    assert sample.count == 5
    redis_mock.zrangebyscore.assert_awaited_once_with(
        "member_count:guild-1", NOON.timestamp(), "+inf", start=0, num=1
    )

