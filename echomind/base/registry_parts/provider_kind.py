"""ProviderKind enum (single-class module).

Closed set of well-known chat services plus the generic ``CUSTOM`` endpoint.
Declaration order is the order reported by ``Provider.supported()``.
"""

from __future__ import annotations

from enum import Enum


class ProviderKind(str, Enum):
    CHAT = "chat"
    CHATANYWHERE = "chatanywhere"
    OPENAI = "openai"
    CLAUDE = "claude"
    OLLAMA = "ollama"
    GROK = "grok"
    MISTRAL = "mistral"
    COHERE = "cohere"
    GEMINI = "gemini"
    CUSTOM = "custom"


__all__ = ["ProviderKind"]
