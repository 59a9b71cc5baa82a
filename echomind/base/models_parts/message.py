"""
Message DTO shared by every provider codec.

Defines the `Message` dataclass and the `Role` literal. Content is either
plain text or an ordered tuple of `ContentPart` items. Role values are a
convention (``system``, ``user``, ``assistant``) and are not enforced.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Sequence, Tuple, Union

from .content_part import ContentPart


# Conventional message roles.
Role = Literal["system", "user", "assistant"]

MessageContent = Union[str, Tuple[ContentPart, ...]]


@dataclass(frozen=True)
class Message:
    """A canonical chat message.

    Attributes:
        role: Author role, conventionally ``"system"``, ``"user"`` or
            ``"assistant"``.
        content: Plain text, or an ordered tuple of parts. Lists passed at
            construction are frozen into tuples.
    """

    role: str
    content: MessageContent

    def __post_init__(self) -> None:
        if self.content is None:
            raise ValueError("message content must not be absent")
        if isinstance(self.content, list):
            object.__setattr__(self, "content", tuple(self.content))

    @classmethod
    def text(cls, role: str, content: str) -> "Message":
        return cls(role=role, content=content)

    @classmethod
    def multimodal(cls, role: str, parts: Sequence[ContentPart]) -> "Message":
        return cls(role=role, content=tuple(parts))

    def is_structured(self) -> bool:
        """Return True when content is a sequence of parts."""
        return not isinstance(self.content, str)

    def parts(self) -> Tuple[ContentPart, ...]:
        """Return content as parts; plain text becomes a single text part."""
        if isinstance(self.content, str):
            return (ContentPart.of_text(self.content),)
        return self.content

    def get_text(self) -> str:
        """Return the text of this message.

        Plain content is returned as-is. For structured content the text parts
        are joined with newlines and image parts are left out.
        """
        if isinstance(self.content, str):
            return self.content
        return "\n".join(p.text or "" for p in self.content if p.is_text())

    def images(self) -> List[ContentPart]:
        return [p for p in self.parts() if not p.is_text()]

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-compatible JSON shape of this message."""
        if isinstance(self.content, str):
            return {"role": self.role, "content": self.content}
        return {"role": self.role, "content": [p.to_dict() for p in self.content]}

    def __str__(self) -> str:
        if isinstance(self.content, str):
            return self.content
        return "".join(str(p) for p in self.content)


__all__ = [
    "Message",
    "MessageContent",
    "Role",
]
