"""
Canonical message model public surface.

Re-exports the one-class-per-file implementations under
``echomind.base.models_parts`` so callers have a single stable import path.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import Message, MessageContent, Role
from .models_parts.chat_request import ChatRequest

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "MessageContent",
    "Role",
    "ChatRequest",
]
