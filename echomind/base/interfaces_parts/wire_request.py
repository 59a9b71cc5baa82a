"""WireRequest DTO (single-class module)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class WireRequest:
    """A provider-specific HTTP request ready to send.

    Attributes:
        url: Fully resolved endpoint.
        json: Request body.
        headers: Provider-specific headers (authentication, versioning).
        params: Query parameters (e.g. a credential passed as ``key``).
    """

    url: str
    json: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


__all__ = ["WireRequest"]
