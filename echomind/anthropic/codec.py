"""Anthropic codec.

System messages are lifted out of the message list into the top-level
``system`` string. ``max_tokens`` is mandatory on this API and is filled with
a default when unset. Authentication uses ``x-api-key`` plus the pinned
``anthropic-version`` header. Streaming replies are SSE events; text arrives
in ``content_block_delta`` events as ``delta.text``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..base.interfaces import ProviderCodec, WireRequest
from ..base.models import ChatRequest, Message
from ..config.defaults import (
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_DEFAULT_MODEL,
    ANTHROPIC_VERSION,
)

if TYPE_CHECKING:  # pragma: no cover
    from ..base.registry import Provider


def _content(message: Message) -> Any:
    if not message.is_structured():
        return message.content
    blocks: List[Dict[str, Any]] = []
    for part in message.parts():
        if part.is_text():
            blocks.append({"type": "text", "text": part.text or ""})
            continue
        inline = part.data_url_parts()
        if inline is not None:
            mime, data = inline
            blocks.append({"type": "image", "source": {"type": "base64", "media_type": mime, "data": data}})
        else:
            blocks.append({"type": "image", "source": {"type": "url", "url": part.image_url or ""}})
    return blocks


class AnthropicCodec(ProviderCodec):
    schema = "anthropic"
    default_model = ANTHROPIC_DEFAULT_MODEL
    native_streaming = True
    stream_framing = "sse"

    def build_request(
        self,
        request: ChatRequest,
        provider: "Provider",
        credential: Optional[str],
        stream: bool = False,
    ) -> WireRequest:
        model = self.resolve_model(request)
        system = "\n\n".join(m.get_text() for m in request.messages if m.role == "system")
        body: Dict[str, Any] = {
            "model": model,
            "max_tokens": request.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
            "messages": [
                {"role": m.role, "content": _content(m)}
                for m in request.messages
                if m.role != "system"
            ],
        }
        if system:
            body["system"] = system
        for name in ("temperature", "top_p", "top_k"):
            value = getattr(request, name)
            if value is not None:
                body[name] = value
        if stream:
            body["stream"] = True
        headers = {"anthropic-version": ANTHROPIC_VERSION}
        if credential:
            headers["x-api-key"] = credential
        return WireRequest(url=provider.endpoint(model), json=body, headers=headers)

    def decode_body(self, data: Dict[str, Any]) -> str:
        blocks = data.get("content")
        if isinstance(blocks, list):
            for block in blocks:
                if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str):
                    return block["text"]
        raise self.empty_response("reply carries no text block")

    def decode_delta(self, event: Dict[str, Any]) -> Optional[str]:
        if event.get("type") != "content_block_delta":
            return None
        delta = event.get("delta")
        if not isinstance(delta, dict):
            return None
        text = delta.get("text")
        return text if isinstance(text, str) else None


__all__ = ["AnthropicCodec"]
