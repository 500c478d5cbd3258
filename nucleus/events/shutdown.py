import logging

logger = logging.getLogger(__name__)

EVENT = "shutdown"
ONCE = True
INTERNAL = True


async def callback(client) -> None:
    logger.info("Client shutting down")
