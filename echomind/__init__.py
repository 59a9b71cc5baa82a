"""echomind package

Multi-provider chat delivery: one canonical request translated to each
provider's wire schema, whole-body and streamed replies decoded back to text,
a response cache for completed replies, and an ordered provider fallback chain.

Public API (re-exported):
    - Version: ``__version__``
    - Models: :class:`ChatRequest`, :class:`Message`, :class:`ContentPart`
    - Registry: :class:`Provider`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Delivery: :func:`deliver`, :class:`DeliveryEngine`, :class:`ApiClient`,
      :func:`compare_models`
    - Cache: :class:`ResponseCache`
"""

from __future__ import annotations

__version__ = "0.3.0"

from .base.errors import ErrorCode, ProviderError
from .base.models import ChatRequest, ContentPart, Message
from .base.registry import Provider
from .base.resilience.cache import ResponseCache
from .service import (
    ApiClient,
    CompareResult,
    DeliveryEngine,
    DeliveryResult,
    compare_models,
    deliver,
)

__all__ = [
    "__version__",
    "ApiClient",
    "ChatRequest",
    "CompareResult",
    "ContentPart",
    "DeliveryEngine",
    "DeliveryResult",
    "ErrorCode",
    "Message",
    "Provider",
    "ProviderError",
    "ResponseCache",
    "compare_models",
    "deliver",
]
