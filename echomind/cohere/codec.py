"""Cohere codec.

The schema accepts one flattened ``message`` string instead of a message
list: the most recent ``user`` message is sent, or the last message overall
when no user message exists. Image parts are dropped. There is no native
incremental form, so streaming is emulated by the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from ..base.interfaces import ProviderCodec, WireRequest, bearer_headers
from ..base.models import ChatRequest, Message
from ..config.defaults import COHERE_DEFAULT_MODEL, COHERE_DEFAULT_TEMPERATURE

if TYPE_CHECKING:  # pragma: no cover
    from ..base.registry import Provider


def select_message(request: ChatRequest) -> Optional[Message]:
    """Return the most recent user message, else the last message, else ``None``."""
    for message in reversed(request.messages):
        if message.role == "user":
            return message
    return request.messages[-1] if request.messages else None


class CohereCodec(ProviderCodec):
    schema = "cohere"
    default_model = COHERE_DEFAULT_MODEL
    native_streaming = False

    def build_request(
        self,
        request: ChatRequest,
        provider: "Provider",
        credential: Optional[str],
        stream: bool = False,
    ) -> WireRequest:
        model = self.resolve_model(request)
        selected = select_message(request)
        body: Dict[str, Any] = {
            "message": selected.get_text() if selected is not None else "",
            "model": model,
            "temperature": (
                COHERE_DEFAULT_TEMPERATURE if request.temperature is None else request.temperature
            ),
        }
        if request.max_tokens is not None:
            body["max_tokens"] = request.max_tokens
        return WireRequest(
            url=provider.endpoint(model),
            json=body,
            headers=bearer_headers(credential),
        )

    def decode_body(self, data: Dict[str, Any]) -> str:
        text = data.get("text")
        if not isinstance(text, str):
            raise self.empty_response("reply carries no text")
        return text


__all__ = ["CohereCodec", "select_message"]
