"""Resilience helpers: the response cache."""

from __future__ import annotations

from .cache import CacheEntry, ResponseCache, fingerprint, get_default_cache

__all__ = ["CacheEntry", "ResponseCache", "fingerprint", "get_default_cache"]
