"""
Interaction - one inbound command invocation and the replies it produced.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional

from .errors import InteractionError


@dataclass
class Reply:
    """A single message sent back to the caller."""
    content: str
    ephemeral: bool = False
    kind: str = "reply"  # reply | edit | follow_up


@dataclass
class Interaction:
    """
    Command invocation context handed to command handlers.

    A handler answers with reply() once; later messages go through
    edit_reply() (amends the first reply) or follow_up() (a new message).
    """

    command_name: str
    user_id: Optional[str] = None
    guild_id: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    replies: List[Reply] = field(default_factory=list)

    @property
    def replied(self) -> bool:
        """Whether a reply has already been sent."""
        return any(r.kind == "reply" for r in self.replies)

    async def reply(self, content: str, ephemeral: bool = False) -> Reply:
        if self.replied:
            raise InteractionError(f"Interaction '{self.command_name}' has already been replied to")
        message = Reply(content=content, ephemeral=ephemeral)
        self.replies.append(message)
        return message

    async def edit_reply(self, content: str) -> Reply:
        if not self.replied:
            raise InteractionError(f"Interaction '{self.command_name}' has no reply to edit")
        message = Reply(content=content, kind="edit")
        self.replies.append(message)
        return message

    async def follow_up(self, content: str, ephemeral: bool = False) -> Reply:
        message = Reply(content=content, ephemeral=ephemeral, kind="follow_up")
        self.replies.append(message)
        return message
