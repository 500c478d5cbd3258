"""
Handler registry for commands and lifecycle events.

Populated once at startup, then sealed. The only mutation after sealing
is the removal of a `once` subscription when it fires.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from .errors import RegistryError

logger = logging.getLogger(__name__)

Callback = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class CommandHandler:
    """Request handler invoked by name with an Interaction."""
    name: str
    invoke: Callback
    description: str = ""


@dataclass(frozen=True, eq=False)
class EventHandler:
    """Lifecycle subscriber for a named event."""
    event: str
    name: str
    invoke: Callback
    once: bool = False


class HandlerRegistry:
    """Two disjoint registries: commands by name, subscribers by event."""

    def __init__(self):
        self._commands: Dict[str, CommandHandler] = {}
        self._events: Dict[str, List[EventHandler]] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_open(self) -> None:
        if self._sealed:
            raise RegistryError("Handler registry is sealed; register handlers before startup completes")

    def register_command(self, name: str, invoke: Callback, description: str = "") -> CommandHandler:
        """
        Register a command handler.

        Raises:
            RegistryError: If the name is taken or the registry is sealed
        """
        self._check_open()
        if not name:
            raise RegistryError("Command name must not be empty")
        if name in self._commands:
            raise RegistryError(f"Command '{name}' is already registered")

        handler = CommandHandler(name=name, invoke=invoke, description=description)
        self._commands[name] = handler
        logger.info(f"Registered command {name}")
        return handler

    def subscribe(
        self, event: str, invoke: Callback, once: bool = False, name: Optional[str] = None
    ) -> EventHandler:
        """
        Subscribe a lifecycle handler to an event.

        Raises:
            RegistryError: If the registry is sealed
        """
        self._check_open()
        if not event:
            raise RegistryError("Event name must not be empty")

        handler = EventHandler(
            event=event,
            name=name or getattr(invoke, "__name__", event),
            invoke=invoke,
            once=once,
        )
        self._events.setdefault(event, []).append(handler)
        logger.info(f"Registered event {event} ({'once' if once else 'repeating'})")
        return handler

    def seal(self) -> None:
        """Close the registry for further registration."""
        self._sealed = True

    def get_command(self, name: str) -> Optional[CommandHandler]:
        return self._commands.get(name)

    def commands(self) -> Mapping[str, CommandHandler]:
        """Read-only view of registered commands."""
        return MappingProxyType(self._commands)

    def subscribers(self, event: str) -> List[EventHandler]:
        return list(self._events.get(event, ()))

    def take_subscribers(self, event: str) -> List[EventHandler]:
        """
        Return the subscribers for one emission and retire `once` handlers.

        A `once` handler is removed before it runs, so it can never be
        returned by a second call.
        """
        handlers = self._events.get(event)
        if not handlers:
            return []

        taken = list(handlers)
        remaining = [h for h in handlers if not h.once]
        if remaining:
            self._events[event] = remaining
        else:
            del self._events[event]
        return taken
