"""Response cache for completed, non-streaming replies.

Purpose
-------
Memoize the decoded text of whole-body replies so an identical request
against the same provider skips the network round-trip.

Semantics
---------
- Fixed capacity with least-recently-used eviction on insert.
- Each entry carries its own TTL; an expired entry reads as absent and is
  removed by the lookup that observes the expiry.
- Every operation is a single short critical section (map lookup or insert)
  and is never held across I/O. When the lock cannot be taken within a short
  bounded wait, ``lookup`` reports a miss and ``store`` does nothing. Cache
  trouble never fails a request.

Streaming requests are never read from or written to the cache; that rule is
enforced by the delivery engine, which only calls this module on the
whole-body path.
"""

from __future__ import annotations

import hashlib
import struct
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from ..constants import CACHE_CAPACITY, CACHE_LOCK_TIMEOUT_SECONDS, CACHE_TTL_SECONDS
from ..logging import get_logger, log_event
from ..models import ChatRequest

Clock = Callable[[], float]

_logger = get_logger("echomind.cache")


@dataclass(frozen=True)
class CacheEntry:
    """A cached reply.

    Attributes:
        response: Decoded reply text.
        created_at: Clock reading (seconds) at insertion.
        ttl: Lifetime in seconds.
    """

    response: str
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


class ResponseCache:
    """Bounded, recency-ordered, TTL-aware map from fingerprint to reply."""

    def __init__(
        self,
        capacity: int = CACHE_CAPACITY,
        *,
        default_ttl: float = CACHE_TTL_SECONDS,
        clock: Clock = time.monotonic,
        lock_timeout: float = CACHE_LOCK_TIMEOUT_SECONDS,
    ) -> None:
        if capacity < 1:
            raise ValueError("cache capacity must be at least 1")
        self.capacity = capacity
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock_timeout = lock_timeout
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def _acquire(self, op: str) -> bool:
        if self._lock.acquire(timeout=self._lock_timeout):
            return True
        log_event(_logger, "cache.lock_unavailable", op=op)
        return False

    def lookup(self, fingerprint: str) -> Optional[str]:
        """Return the cached reply, or ``None`` when absent or expired.

        A hit refreshes the entry's recency. An expired entry is removed.
        """
        if not self._acquire("lookup"):
            return None
        try:
            entry = self._entries.get(fingerprint)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[fingerprint]
                return None
            self._entries.move_to_end(fingerprint)
            return entry.response
        finally:
            self._lock.release()

    def store(self, fingerprint: str, text: str, ttl: Optional[float] = None) -> None:
        """Insert or replace an entry, evicting the least recently used one when full."""
        entry = CacheEntry(
            response=text,
            created_at=self._clock(),
            ttl=self.default_ttl if ttl is None else ttl,
        )
        if not self._acquire("store"):
            return
        try:
            if fingerprint in self._entries:
                self._entries.move_to_end(fingerprint)
            elif len(self._entries) >= self.capacity:
                self._entries.popitem(last=False)
            self._entries[fingerprint] = entry
        finally:
            self._lock.release()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, fingerprint: object) -> bool:
        # Raw presence, expired or not; used by maintenance and tests.
        with self._lock:
            return fingerprint in self._entries


_DEFAULT_CACHE: ResponseCache | None = None
_DEFAULT_LOCK = threading.Lock()


def get_default_cache() -> ResponseCache:
    """Return the process-wide cache shared by clients built without one."""
    global _DEFAULT_CACHE  # noqa: PLW0603 - documented module cache
    if _DEFAULT_CACHE is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_CACHE is None:
                _DEFAULT_CACHE = ResponseCache()
    return _DEFAULT_CACHE


def _feed(h: "hashlib._Hash", value: Optional[bytes]) -> None:
    # Length-prefixed so adjacent fields cannot run together; -1 marks absence.
    if value is None:
        h.update(struct.pack(">q", -1))
        return
    h.update(struct.pack(">q", len(value)))
    h.update(value)


def _feed_text(h: "hashlib._Hash", value: Optional[str]) -> None:
    _feed(h, None if value is None else value.encode("utf-8"))


def _feed_float(h: "hashlib._Hash", value: Optional[float]) -> None:
    _feed(h, None if value is None else struct.pack(">d", float(value)))


def _feed_int(h: "hashlib._Hash", value: Optional[int]) -> None:
    _feed(h, None if value is None else struct.pack(">q", int(value)))


def fingerprint(provider_name: str, endpoint: str, request: ChatRequest) -> str:
    """Return the deterministic cache key for ``request`` sent to a provider.

    Covers the provider name and endpoint, model, sampling parameters, and
    every message's role and content in order. Image parts contribute their
    URL, so prompts that differ only by image do not share an entry.
    """
    h = hashlib.sha256()
    _feed_text(h, provider_name)
    _feed_text(h, endpoint)
    _feed_text(h, request.model)
    _feed_float(h, request.temperature)
    _feed_int(h, request.max_tokens)
    _feed_float(h, request.top_p)
    _feed_int(h, request.top_k)
    _feed_int(h, len(request.messages))
    for message in request.messages:
        _feed_text(h, message.role)
        parts = message.parts()
        _feed_int(h, len(parts))
        for part in parts:
            _feed_text(h, part.type)
            _feed_text(h, part.text if part.is_text() else part.image_url)
    return h.hexdigest()


__all__ = [
    "CacheEntry",
    "ResponseCache",
    "fingerprint",
    "get_default_cache",
]
