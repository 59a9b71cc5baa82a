"""Ollama local daemon chat schema."""

from __future__ import annotations

from .codec import OllamaCodec

__all__ = ["OllamaCodec"]
