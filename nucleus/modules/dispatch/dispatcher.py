"""
Handler dispatcher with per-invocation failure isolation.

Every invocation runs as a tracked asyncio task wrapped by a single guard.
The guard turns any handler failure into a DispatchOutcome, so nothing a
handler raises can reach the caller of dispatch() or emit().
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, List, Optional, Set

from .errors import HandlerFailure, HandlerKind, NotificationFailure
from .interaction import Interaction
from .registry import HandlerRegistry

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "There was an error while executing this command!"


@dataclass
class DispatchOutcome:
    """Observed result of one handler invocation."""
    name: str
    kind: HandlerKind
    ok: bool
    error: Optional[HandlerFailure] = None
    event: Optional[str] = None


class HandlerDispatcher:
    """Routes commands to their handler and fans events out to subscribers."""

    def __init__(self, registry: HandlerRegistry):
        self.registry = registry
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of handler tasks still running."""
        return len(self._tasks)

    def _track(self, coro: Awaitable[DispatchOutcome], task_name: str) -> "asyncio.Task[DispatchOutcome]":
        task = asyncio.create_task(coro, name=task_name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def dispatch(self, name: str, interaction: Interaction) -> Optional["asyncio.Task[DispatchOutcome]"]:
        """
        Invoke the command handler registered under ``name``.

        Must be called from within a running event loop.

        Args:
            name: Command name
            interaction: Invocation context passed to the handler

        Returns:
            The tracked task, or None if no handler is registered
        """
        handler = self.registry.get_command(name)
        if handler is None:
            logger.debug(f"Ignoring unknown command {name}")
            return None

        return self._track(self._run_command(handler.name, handler.invoke, interaction), f"command:{name}")

    def emit(self, event: str, *args: Any) -> List["asyncio.Task[DispatchOutcome]"]:
        """
        Invoke every subscriber of ``event`` with ``args``.

        Subscribers registered with once=True are retired before they run.

        Returns:
            One tracked task per subscriber
        """
        handlers = self.registry.take_subscribers(event)
        if not handlers:
            logger.debug(f"No subscribers for event {event}")
            return []

        return [
            self._track(self._run_event(event, h.name, h.invoke, args), f"event:{event}:{h.name}")
            for h in handlers
        ]

    async def drain(self) -> None:
        """Wait for every outstanding handler task."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run_command(self, name, invoke, interaction: Interaction) -> DispatchOutcome:
        try:
            await invoke(interaction)
        except Exception as e:
            failure = HandlerFailure(name, "command", e)
            logger.exception(f"Error in command {name} callback: {e}")
            await self._notify_failure(name, interaction)
            return DispatchOutcome(name=name, kind="command", ok=False, error=failure)
        return DispatchOutcome(name=name, kind="command", ok=True)

    async def _notify_failure(self, name: str, interaction: Interaction) -> None:
        try:
            if interaction.replied:
                await interaction.edit_reply(FAILURE_MESSAGE)
            else:
                await interaction.follow_up(FAILURE_MESSAGE, ephemeral=True)
        except Exception as e:
            failure = NotificationFailure(name, "command", e)
            logger.error(f"Failed to report error for command {name}: {failure}")

    async def _run_event(self, event: str, name: str, invoke, args) -> DispatchOutcome:
        try:
            await invoke(*args)
        except Exception as e:
            failure = HandlerFailure(name, "event", e)
            logger.exception(f"Error in event {event} callback {name}: {e}")
            return DispatchOutcome(name=name, kind="event", ok=False, error=failure, event=event)
        return DispatchOutcome(name=name, kind="event", ok=True, event=event)
