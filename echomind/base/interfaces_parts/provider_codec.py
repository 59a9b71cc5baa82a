"""ProviderCodec base (single-class module).

A codec is the translator/decoder pair for one wire schema. Codecs are
stateless and shared across threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..errors import ErrorCode, ProviderError
from ..models import ChatRequest
from .wire_request import WireRequest

if TYPE_CHECKING:  # pragma: no cover
    from ..registry import Provider


class ProviderCodec(ABC):
    """Translate canonical requests to one wire schema and decode its replies.

    Class attributes:
        schema: Schema name used in the codec lookup table.
        default_model: Model used when the request leaves ``model`` unset.
        native_streaming: Whether the schema has an incremental reply form.
            Codecs without one are streamed by emulation: one whole-body call
            and a single sink invocation.
        stream_framing: ``"sse"`` or ``"ndjson"`` for native streams.
        hint_label: Service name used in remediation hints (e.g. ``"Gemini "``).
    """

    schema: str = ""
    default_model: str = ""
    native_streaming: bool = True
    stream_framing: str = "sse"
    hint_label: str = ""

    def resolve_model(self, request: ChatRequest) -> str:
        return request.model or self.default_model

    @abstractmethod
    def build_request(
        self,
        request: ChatRequest,
        provider: "Provider",
        credential: Optional[str],
        stream: bool = False,
    ) -> WireRequest:
        """Return the wire request for ``request`` sent to ``provider``."""

    @abstractmethod
    def decode_body(self, data: Dict[str, Any]) -> str:
        """Extract reply text from a whole-body reply.

        Raises:
            ProviderError: ``EMPTY_RESPONSE`` when the reply holds no text.
        """

    def decode_delta(self, event: Dict[str, Any]) -> Optional[str]:
        """Return the text increment carried by one stream event, if any."""
        return None

    def empty_response(self, detail: str = "") -> ProviderError:
        """Return the ``EMPTY_RESPONSE`` failure; the caller stamps the provider."""
        message = "No response content received"
        if detail:
            message = f"{message}: {detail}"
        return ProviderError(code=ErrorCode.EMPTY_RESPONSE, message=message)


def bearer_headers(credential: Optional[str]) -> Dict[str, str]:
    """Return an ``Authorization`` header when a credential is present."""
    return {"Authorization": f"Bearer {credential}"} if credential else {}


__all__ = ["ProviderCodec", "bearer_headers"]
