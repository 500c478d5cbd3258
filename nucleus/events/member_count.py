"""Record guild member counts announced by the platform bridge."""

import logging

logger = logging.getLogger(__name__)

EVENT = "member_count"
ONCE = False
INTERNAL = False


async def callback(client, guild_id: str, count: int) -> None:
    sample = await client.store.record(str(guild_id), int(count))
    logger.debug(f"Recorded {sample.count} members for guild {guild_id}")
