"""Anthropic Messages API schema (``claude``)."""

from __future__ import annotations

from .codec import AnthropicCodec

__all__ = ["AnthropicCodec"]
