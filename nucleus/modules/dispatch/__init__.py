"""
Dispatch Module - Black Box Interface

Purpose: Route commands and lifecycle events to registered handlers
Interface: HandlerRegistry (register_command, subscribe, seal),
           HandlerDispatcher (dispatch, emit, drain)
Hidden: Task tracking, failure containment, once-subscription retirement

No exception raised by a handler crosses this module's boundary.
"""

from .dispatcher import FAILURE_MESSAGE, DispatchOutcome, HandlerDispatcher
from .errors import HandlerFailure, InteractionError, NotificationFailure, RegistryError
from .interaction import Interaction, Reply
from .registry import CommandHandler, EventHandler, HandlerRegistry

__all__ = [
    "FAILURE_MESSAGE",
    "CommandHandler",
    "DispatchOutcome",
    "EventHandler",
    "HandlerDispatcher",
    "HandlerFailure",
    "HandlerRegistry",
    "Interaction",
    "InteractionError",
    "NotificationFailure",
    "RegistryError",
    "Reply",
]
