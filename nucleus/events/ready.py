import logging

logger = logging.getLogger(__name__)

EVENT = "ready"
ONCE = True
INTERNAL = True


async def callback(client) -> None:
    logger.info(f"Client ready with {len(client.registry.commands())} commands")
