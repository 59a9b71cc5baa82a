"""Provider registry.

Re-exports the registry types split into single-class modules under
``echomind.base.registry_parts``.
"""

from __future__ import annotations

from .registry_parts import (
    CATALOGUE,
    Provider,
    ProviderKind,
    ProviderSpec,
    WireSchema,
)

__all__ = [
    "CATALOGUE",
    "Provider",
    "ProviderKind",
    "ProviderSpec",
    "WireSchema",
]
