"""Codec interface parts (one class per module)."""

from __future__ import annotations

from .provider_codec import ProviderCodec, bearer_headers
from .wire_request import WireRequest

__all__ = ["ProviderCodec", "WireRequest", "bearer_headers"]
