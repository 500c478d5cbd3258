"""
Nucleus client - the long-lived context object.

Built once at startup by build_client(), then passed explicitly to
everything that needs it. Holds the credential rotator, the handler
registry and dispatcher, and the member count store.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from nucleus.commands import register_commands
from nucleus.config import Settings, load_settings
from nucleus.events import register_events
from nucleus.modules.auth import CredentialRotator, RotatingTokenAuthService
from nucleus.modules.dispatch import HandlerDispatcher, HandlerRegistry
from nucleus.modules.storage import MemberCountStore

logger = logging.getLogger(__name__)


@dataclass
class NucleusClient:
    """Process-wide context shared by the API layer and all handlers."""

    settings: Settings
    rotator: CredentialRotator
    auth: RotatingTokenAuthService
    registry: HandlerRegistry
    dispatcher: HandlerDispatcher
    store: MemberCountStore
    redis: Any = None

    async def teardown(self) -> None:
        """Announce shutdown, wait for running handlers and close storage."""
        self.dispatcher.emit("shutdown")
        await self.dispatcher.drain()
        if self.redis is not None:
            await self.redis.aclose()
            logger.info("Database connection closed")
        logger.info("Client destroyed")


def build_client(
    settings: Optional[Settings] = None,
    redis_client: Optional[Any] = None,
    rotator: Optional[CredentialRotator] = None,
) -> NucleusClient:
    """
    Build the client and register every command and event handler.

    This is the composition root: it creates all components, wires them
    together and seals the registry.

    Args:
        settings: Application settings (defaults to environment)
        redis_client: Async Redis client for the store
        rotator: Pre-built rotator (tests inject a fixed clock)

    Returns:
        Fully wired NucleusClient
    """
    settings = settings or load_settings()
    rotator = rotator or CredentialRotator(
        secret_env=settings.auth.secret_env, use_utc=settings.auth.use_utc
    )
    registry = HandlerRegistry()

    client = NucleusClient(
        settings=settings,
        rotator=rotator,
        auth=RotatingTokenAuthService(rotator),
        registry=registry,
        dispatcher=HandlerDispatcher(registry),
        store=MemberCountStore(redis_client),
        redis=redis_client,
    )

    logger.info("Registering commands")
    register_commands(client)
    logger.info("Registering events")
    register_events(client)
    registry.seal()
    logger.info(f"Handlers registered: {len(registry.commands())} commands")
    return client
