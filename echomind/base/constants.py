"""Base shared constants for the delivery path.

Central location to avoid scattering magic strings and default numbers.

# pragma: allowlist secret
"""
from __future__ import annotations

# Process-wide credential variable consulted after an explicit argument.
CREDENTIAL_ENV_VAR = "ECHOMIND_API_KEY"  # pragma: allowlist secret - variable name only

USER_AGENT = "echomind/0.3.0"

# Response cache defaults
CACHE_CAPACITY = 100
CACHE_TTL_SECONDS = 300.0
# Bounded wait for the cache lock before degrading to a miss.
CACHE_LOCK_TIMEOUT_SECONDS = 0.05

# Event stream framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

__all__ = [
    "CREDENTIAL_ENV_VAR",
    "USER_AGENT",
    "CACHE_CAPACITY",
    "CACHE_TTL_SECONDS",
    "CACHE_LOCK_TIMEOUT_SECONDS",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
]
