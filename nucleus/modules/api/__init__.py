"""
API Module - Black Box Interface

Purpose: HTTP request and response models
Interface: REST API models
Hidden: Validation rules

The API module only describes data - it contains no business logic.
"""

from .models import (
    CommandInfo,
    CommandRequest,
    CommandResponse,
    EventRequest,
    EventResponse,
    ReplyModel,
)

__all__ = [
    "CommandInfo",
    "CommandRequest",
    "CommandResponse",
    "EventRequest",
    "EventResponse",
    "ReplyModel",
]
