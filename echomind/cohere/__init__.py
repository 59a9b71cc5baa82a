"""Cohere flattened-message schema."""

from __future__ import annotations

from .codec import CohereCodec

__all__ = ["CohereCodec"]
