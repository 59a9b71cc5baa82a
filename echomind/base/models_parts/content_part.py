"""
Typed content part model for multimodal messages.

A message may carry a plain string or an ordered list of parts. Each part is
either a text segment or an image reference (remote URL or base64 ``data:``
URL). Codecs decide how each part is expressed on the wire.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Tuple


# Part kinds accepted in canonical messages.
ContentPartType = Literal[
    "text",       # Plain text segment
    "image_url",  # Image reference: http(s) URL or data:<mime>;base64,<payload>
]


@dataclass(frozen=True)
class ContentPart:
    """A single piece of message content.

    Attributes:
        type: ``"text"`` or ``"image_url"``.
        text: Text for ``"text"`` parts.
        image_url: URL for ``"image_url"`` parts. Base64 payloads use the
            ``data:<mime>;base64,<payload>`` form.
    """

    type: ContentPartType
    text: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, url: str) -> "ContentPart":
        return cls(type="image_url", image_url=url)

    def is_text(self) -> bool:
        return self.type == "text"

    def data_url_parts(self) -> Optional[Tuple[str, str]]:
        """Return ``(mime_type, base64_payload)`` for data URLs, else ``None``."""
        url = self.image_url or ""
        if not url.startswith("data:") or ";base64," not in url:
            return None
        header, payload = url[5:].split(";base64,", 1)
        return (header or "application/octet-stream"), payload

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-compatible JSON shape of this part."""
        if self.is_text():
            return {"type": "text", "text": self.text or ""}
        return {"type": "image_url", "image_url": {"url": self.image_url or ""}}

    def __str__(self) -> str:
        if self.is_text():
            return self.text or ""
        return f"[Image: {self.image_url}]"


__all__ = [
    "ContentPart",
    "ContentPartType",
]
