from dataclasses import dataclass
from datetime import UTC, datetime
from typing import List, Optional, Union


@dataclass(frozen=True)
class MemberCountSample:
    """Member count of a guild at one point in time."""
    count: int
    at: datetime


def _epoch(when: datetime) -> float:
    return when.timestamp()


class MemberCountStore:
    def __init__(self, redis_client):
        """
        Initialize member count store.

        Args:
            redis_client: Async Redis client
        """
        self.redis = redis_client

    @staticmethod
    def _key(guild_id: str) -> str:
        return f"member_count:{guild_id}"

    @staticmethod
    def _parse(member: Union[str, bytes]) -> MemberCountSample:
        if isinstance(member, bytes):
            member = member.decode("utf-8")
        millis, count = member.split(":", 1)
        return MemberCountSample(
            count=int(count), at=datetime.fromtimestamp(int(millis) / 1000, tz=UTC)
        )

    def _first(self, members: List) -> Optional[MemberCountSample]:
        return self._parse(members[0]) if members else None

    async def record(self, guild_id: str, count: int, at: Optional[datetime] = None) -> MemberCountSample:
        """
        Store a member count sample.

        Args:
            guild_id: Guild identifier
            count: Member count
            at: Sample time (defaults to now)

        Returns:
            The stored sample
        """
        if count < 0:
            raise ValueError(f"Member count must not be negative, got {count}")

        at = at or datetime.now(UTC)
        millis = int(_epoch(at) * 1000)
        # Timestamp prefix keeps members unique when the count repeats
        await self.redis.zadd(self._key(guild_id), {f"{millis}:{count}": _epoch(at)})
        return MemberCountSample(count=count, at=datetime.fromtimestamp(millis / 1000, tz=UTC))

    async def latest(self, guild_id: str) -> Optional[MemberCountSample]:
        """Most recent sample, if any."""
        return self._first(await self.redis.zrevrange(self._key(guild_id), 0, 0))

    async def latest_before(self, guild_id: str, when: datetime) -> Optional[MemberCountSample]:
        """Most recent sample strictly before ``when``."""
        members = await self.redis.zrevrangebyscore(
            self._key(guild_id), f"({_epoch(when)}", "-inf", start=0, num=1
        )
        return self._first(members)

    async def earliest_since(self, guild_id: str, when: datetime) -> Optional[MemberCountSample]:
        """Oldest sample at or after ``when``."""
        members = await self.redis.zrangebyscore(
            self._key(guild_id), _epoch(when), "+inf", start=0, num=1
        )
        return self._first(members)

