"""Service layer: per-provider client, delivery engine, comparison and CLI."""

from __future__ import annotations

from .api_client import ApiClient
from .compare import CompareResult, compare_models
from .delivery import DeliveryEngine, DeliveryResult, deliver

__all__ = [
    "ApiClient",
    "CompareResult",
    "DeliveryEngine",
    "DeliveryResult",
    "compare_models",
    "deliver",
]
