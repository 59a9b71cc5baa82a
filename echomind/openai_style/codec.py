"""OpenAI-style codec.

Request body is the canonical request nearly verbatim: ``model``, the
``messages`` array (image parts as ``image_url`` objects) and whichever
sampling parameters the caller set. Authentication is a bearer header.
Streaming replies are SSE ``chat.completion.chunk`` events carrying
``choices[0].delta.content``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from ..base.interfaces import ProviderCodec, WireRequest, bearer_headers
from ..base.models import ChatRequest
from ..config.defaults import OPENAI_STYLE_DEFAULT_MODEL

if TYPE_CHECKING:  # pragma: no cover
    from ..base.registry import Provider


def _first_choice(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    return first if isinstance(first, dict) else None


class OpenAIStyleCodec(ProviderCodec):
    schema = "openai_style"
    default_model = OPENAI_STYLE_DEFAULT_MODEL
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
        body: Dict[str, Any] = {
            "model": model,
            "messages": [m.to_dict() for m in request.messages],
        }
        body.update(request.sampling_params())
        if stream:
            body["stream"] = True
        return WireRequest(
            url=provider.endpoint(model),
            json=body,
            headers=bearer_headers(credential),
        )

    def decode_body(self, data: Dict[str, Any]) -> str:
        choice = _first_choice(data)
        if choice is None:
            raise self.empty_response("no choices in reply")
        message = choice.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise self.empty_response("choice carries no message content")
        return content

    def decode_delta(self, event: Dict[str, Any]) -> Optional[str]:
        choice = _first_choice(event)
        if choice is None:
            return None
        delta = choice.get("delta")
        if not isinstance(delta, dict):
            return None
        content = delta.get("content")
        return content if isinstance(content, str) else None


__all__ = ["OpenAIStyleCodec"]
