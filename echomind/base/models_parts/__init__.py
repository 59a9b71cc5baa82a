"""Models parts package: one DTO per module.

Prefer importing from ``echomind.base.models`` for the stable surface.
"""

from .content_part import ContentPart, ContentPartType
from .message import Message, MessageContent, Role
from .chat_request import ChatRequest

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "MessageContent",
    "Role",
    "ChatRequest",
]
