"""Dispatch error types."""

from typing import Literal

HandlerKind = Literal["command", "event"]


class RegistryError(ValueError):
    """Invalid handler registration (duplicate name, registry sealed)."""


class InteractionError(RuntimeError):
    """Reply primitives used out of order."""


class HandlerFailure(Exception):
    """A registered handler raised while being invoked."""

    def __init__(self, handler: str, kind: HandlerKind, cause: BaseException):
        super().__init__(f"{kind} handler '{handler}' failed: {cause!r}")
        self.handler = handler
        self.kind = kind
        self.cause = cause


class NotificationFailure(HandlerFailure):
    """Reporting a HandlerFailure to the caller failed as well."""
