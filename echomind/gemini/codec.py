"""Gemini codec.

Every message becomes one ``contents`` entry of ``parts``. There is no
system role: ``system`` maps to ``user`` and ``assistant`` maps to ``model``.
The endpoint is templated by model name and the credential travels as the
``key`` query parameter rather than a header. Streaming is emulated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..base.interfaces import ProviderCodec, WireRequest
from ..base.models import ChatRequest, Message
from ..config.defaults import GEMINI_DEFAULT_MODEL

if TYPE_CHECKING:  # pragma: no cover
    from ..base.registry import Provider

_ROLE_MAP = {"system": "user", "user": "user", "assistant": "model", "model": "model"}

_GENERATION_FIELDS = (
    ("temperature", "temperature"),
    ("max_tokens", "maxOutputTokens"),
    ("top_p", "topP"),
    ("top_k", "topK"),
)


def _content_parts(message: Message) -> List[Dict[str, Any]]:
    parts: List[Dict[str, Any]] = []
    for part in message.parts():
        if part.is_text():
            parts.append({"text": part.text or ""})
            continue
        inline = part.data_url_parts()
        if inline is not None:
            mime, data = inline
            parts.append({"inline_data": {"mime_type": mime, "data": data}})
        else:
            # Remote images cannot be inlined without fetching them.
            parts.append({"text": str(part)})
    return parts


class GeminiCodec(ProviderCodec):
    schema = "gemini"
    default_model = GEMINI_DEFAULT_MODEL
    native_streaming = False
    hint_label = "Gemini "

    def build_request(
        self,
        request: ChatRequest,
        provider: "Provider",
        credential: Optional[str],
        stream: bool = False,
    ) -> WireRequest:
        model = self.resolve_model(request)
        body: Dict[str, Any] = {
            "contents": [
                {"role": _ROLE_MAP.get(m.role, "user"), "parts": _content_parts(m)}
                for m in request.messages
            ]
        }
        generation = {
            wire: getattr(request, attr)
            for attr, wire in _GENERATION_FIELDS
            if getattr(request, attr) is not None
        }
        if generation:
            body["generationConfig"] = generation
        return WireRequest(
            url=provider.endpoint(model),
            json=body,
            params={"key": credential} if credential else {},
        )

    def decode_body(self, data: Dict[str, Any]) -> str:
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise self.empty_response("no candidates in reply")
        first = candidates[0]
        content = first.get("content") if isinstance(first, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts:
            raise self.empty_response("candidate carries no parts")
        texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
        if not texts:
            raise self.empty_response("candidate carries no text parts")
        return "".join(texts)


def parse_model_listing(data: Dict[str, Any]) -> List[Dict[str, str]]:
    """Return ``[{name, description}]`` from a ``models.list`` reply.

    The ``models/`` resource prefix is stripped from names.
    """
    out: List[Dict[str, str]] = []
    for item in data.get("models") or []:
        if not isinstance(item, dict) or not item.get("name"):
            continue
        name = str(item["name"])
        if name.startswith("models/"):
            name = name[len("models/") :]
        out.append({"name": name, "description": str(item.get("description") or "")})
    return out


__all__ = ["GeminiCodec", "parse_model_listing"]
