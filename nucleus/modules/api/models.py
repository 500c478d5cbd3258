"""
Nucleus API data models.

These models define the structure of data passed over the internal API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# Request Models (API Input)


class CommandRequest(BaseModel):
    """Request to run a command."""

    user_id: Optional[str] = Field(None, description="Invoking user identifier", max_length=64)
    guild_id: Optional[str] = Field(None, description="Guild the command was invoked in", max_length=64)
    options: Dict[str, Any] = Field(default_factory=dict, description="Command options")


class EventRequest(BaseModel):
    """Request to announce a lifecycle event."""

    args: List[Any] = Field(default_factory=list, description="Positional event arguments", max_length=20)


# Response Models (API Output)


class ReplyModel(BaseModel):
    """A message produced by a command handler."""

    content: str
    ephemeral: bool = False
    kind: str = Field("reply", pattern="^(reply|edit|follow_up)$")


class CommandResponse(BaseModel):
    """Result of running a command."""

    command: str
    handled: bool = Field(..., description="Whether a handler is registered under this name")
    ok: bool = Field(..., description="Whether the handler completed without error")
    replies: List[ReplyModel] = Field(default_factory=list)


class CommandInfo(BaseModel):
    """Registered command descriptor."""

    name: str
    description: str = ""


class EventResponse(BaseModel):
    """Acknowledgement of an emitted event."""

    event: str
    subscribers: int = Field(..., ge=0, description="Number of subscribers invoked")
