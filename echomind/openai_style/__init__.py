"""OpenAI-compatible chat-completions schema.

Used by ``chat``, ``chatanywhere``, ``openai``, ``grok``, ``mistral`` and
custom URL endpoints.
"""

from __future__ import annotations

from .codec import OpenAIStyleCodec

__all__ = ["OpenAIStyleCodec"]
