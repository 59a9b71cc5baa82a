"""Unified timeout configuration for the delivery path.

Two layers bound every request. ``httpx`` applies ``for_request`` to each
connect, read and write, and a :class:`Deadline` caps the whole exchange on
the wall clock, checked between body reads. Either way the caller sees
``ErrorCode.TIMEOUT`` rather than a hang.

Supported environment variables (all optional):
    ECHOMIND_TIMEOUT_SECONDS   per-request deadline for whole-body calls
    ECHOMIND_CONNECT_TIMEOUT_SECONDS   connection establishment deadline

The configuration is cached per process and refreshed when the variables
change, so tests can adjust them with ``monkeypatch``.
"""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from .errors import ErrorCode, ProviderError

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Deadline for a single request when the caller
            does not pass one.
        connect_timeout_seconds: Upper bound on connection establishment.
    """

    http_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS

    def for_request(self, seconds: Optional[float] = None) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` for one request.

        ``seconds`` overrides the default deadline; connect never exceeds it.
        """
        total = self.total_seconds(seconds)
        return httpx.Timeout(total, connect=min(total, self.connect_timeout_seconds))

    def total_seconds(self, seconds: Optional[float] = None) -> float:
        return float(seconds) if seconds and seconds > 0 else self.http_timeout_seconds

    def deadline(self, seconds: Optional[float] = None, *, clock: Callable[[], float] = time.monotonic) -> "Deadline":
        """Start the wall-clock deadline for one exchange."""
        return Deadline(self.total_seconds(seconds), clock=clock)


class Deadline:
    """Monotonic end-to-end deadline for a single exchange.

    ``check`` is called between body reads; it raises once the budget is
    spent, so no exchange outlives its deadline by more than one read.
    """

    def __init__(self, seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds

    def expired(self) -> bool:
        return self._clock() > self._expires_at

    def check(self) -> None:
        if self.expired():
            raise ProviderError(
                code=ErrorCode.TIMEOUT,
                message=f"request exceeded its {self.seconds:g}s deadline",
                retryable=True,
            )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from the environment, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("ECHOMIND_TIMEOUT_SECONDS", ""),
            os.getenv("ECHOMIND_CONNECT_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("ECHOMIND_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float(
            "ECHOMIND_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS
        ),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "Deadline",
    "TimeoutConfig",
    "get_timeout_config",
]
