"""Gemini hierarchical contents/parts schema."""

from __future__ import annotations

from .codec import GeminiCodec

__all__ = ["GeminiCodec"]
