"""Provider registry parts (one class per module)."""

from __future__ import annotations

from .provider import Provider
from .provider_kind import ProviderKind
from .provider_spec import CATALOGUE, ProviderSpec, WireSchema

__all__ = [
    "CATALOGUE",
    "Provider",
    "ProviderKind",
    "ProviderSpec",
    "WireSchema",
]
