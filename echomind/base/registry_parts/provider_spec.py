"""ProviderSpec record and the provider catalogue.

The catalogue is the lookup table keyed by :class:`ProviderKind`: endpoint
template, credential requirement and the wire schema whose codec translates
requests for that provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from ...config.defaults import (
    ANTHROPIC_ENDPOINT,
    CHAT_ENDPOINT,
    CHATANYWHERE_ENDPOINT,
    COHERE_ENDPOINT,
    GEMINI_ENDPOINT,
    MISTRAL_ENDPOINT,
    OLLAMA_ENDPOINT,
    OPENAI_ENDPOINT,
    XAI_ENDPOINT,
)
from .provider_kind import ProviderKind

WireSchema = Literal["openai_style", "anthropic", "ollama", "cohere", "gemini"]


@dataclass(frozen=True)
class ProviderSpec:
    """Static description of one provider.

    Attributes:
        endpoint: URL, possibly containing a ``{model}`` placeholder. ``None``
            for ``CUSTOM``, whose URL is carried by the provider value.
        requires_credential: Whether a request without a credential must be
            refused at client construction.
        schema: Wire schema name used to select the codec.
    """

    endpoint: Optional[str]
    requires_credential: bool
    schema: WireSchema


CATALOGUE: Dict[ProviderKind, ProviderSpec] = {
    ProviderKind.CHAT: ProviderSpec(CHAT_ENDPOINT, False, "openai_style"),
    ProviderKind.CHATANYWHERE: ProviderSpec(CHATANYWHERE_ENDPOINT, True, "openai_style"),
    ProviderKind.OPENAI: ProviderSpec(OPENAI_ENDPOINT, True, "openai_style"),
    ProviderKind.CLAUDE: ProviderSpec(ANTHROPIC_ENDPOINT, True, "anthropic"),
    ProviderKind.OLLAMA: ProviderSpec(OLLAMA_ENDPOINT, False, "ollama"),
    ProviderKind.GROK: ProviderSpec(XAI_ENDPOINT, True, "openai_style"),
    ProviderKind.MISTRAL: ProviderSpec(MISTRAL_ENDPOINT, True, "openai_style"),
    ProviderKind.COHERE: ProviderSpec(COHERE_ENDPOINT, True, "cohere"),
    ProviderKind.GEMINI: ProviderSpec(GEMINI_ENDPOINT, True, "gemini"),
    ProviderKind.CUSTOM: ProviderSpec(None, True, "openai_style"),
}


__all__ = ["CATALOGUE", "ProviderSpec", "WireSchema"]
