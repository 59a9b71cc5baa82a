"""Shared HTTP client pool.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so concurrent deliveries (for example a model comparison) share
    one connection pool and reuse keep-alive connections instead of opening
    new ones.

Timeout strategy:
    Pooled clients carry the default deadline from :func:`get_timeout_config`.
    Callers pass their own per-request ``timeout`` on each call, which
    ``httpx`` applies as a hard deadline.

Lifecycle & cleanup:
    - Clients are cached by a ``purpose`` string (e.g. ``"chat"``).
    - All clients are closed at interpreter exit via ``atexit``; tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict

import httpx

from ..constants import USER_AGENT
from ..timeouts import get_timeout_config

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()

POOL_LIMITS = httpx.Limits(max_keepalive_connections=20, keepalive_expiry=90.0)


def get_httpx_client(purpose: str = "chat") -> httpx.Client:
    """Return the pooled ``httpx.Client`` for ``purpose``.

    The first request for a purpose creates the client; later requests reuse
    it. Safe for concurrent use.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(
            timeout=get_timeout_config().for_request(),
            limits=POOL_LIMITS,
            headers={"User-Agent": USER_AGENT},
        )
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            with contextlib.suppress(Exception):  # nosec B110 - best-effort shutdown
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
