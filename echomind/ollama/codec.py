"""Ollama codec.

Targets the daemon's ``/api/chat`` endpoint. Sampling parameters travel in
``options`` (``max_tokens`` as ``num_predict``). ``stream`` is always sent
because the daemon streams unless told otherwise. Streaming replies are
newline-delimited JSON objects carrying ``message.content``; the final object
has ``"done": true``. No credential is needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..base.interfaces import ProviderCodec, WireRequest, bearer_headers
from ..base.models import ChatRequest, Message
from ..config.defaults import OLLAMA_DEFAULT_MODEL

if TYPE_CHECKING:  # pragma: no cover
    from ..base.registry import Provider

_OPTION_FIELDS = (
    ("temperature", "temperature"),
    ("max_tokens", "num_predict"),
    ("top_p", "top_p"),
    ("top_k", "top_k"),
)


def _wire_message(message: Message) -> Dict[str, Any]:
    out: Dict[str, Any] = {"role": message.role, "content": message.get_text()}
    images: List[str] = []
    for part in message.images():
        inline = part.data_url_parts()
        if inline is not None:
            images.append(inline[1])
    if images:
        out["images"] = images
    return out


class OllamaCodec(ProviderCodec):
    schema = "ollama"
    default_model = OLLAMA_DEFAULT_MODEL
    native_streaming = True
    stream_framing = "ndjson"

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
            "messages": [_wire_message(m) for m in request.messages],
            "stream": bool(stream),
        }
        options = {
            wire: getattr(request, attr)
            for attr, wire in _OPTION_FIELDS
            if getattr(request, attr) is not None
        }
        if options:
            body["options"] = options
        return WireRequest(
            url=provider.endpoint(model),
            json=body,
            headers=bearer_headers(credential),
        )

    def decode_body(self, data: Dict[str, Any]) -> str:
        message = data.get("message")
        if not isinstance(message, dict) or not isinstance(message.get("content"), str):
            raise self.empty_response("reply carries no message content")
        return message["content"]

    def decode_delta(self, event: Dict[str, Any]) -> Optional[str]:
        message = event.get("message")
        if not isinstance(message, dict):
            return None
        content = message.get("content")
        return content if isinstance(content, str) else None


__all__ = ["OllamaCodec"]
