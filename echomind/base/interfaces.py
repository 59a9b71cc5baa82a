"""
Codec interfaces for the delivery path.

Re-exports the types split into single-class modules under
``echomind.base.interfaces_parts`` so import sites stay stable.
"""

from __future__ import annotations

from .interfaces_parts import ProviderCodec, WireRequest, bearer_headers

__all__ = [
    "ProviderCodec",
    "WireRequest",
    "bearer_headers",
]
