"""Delivery engine: cache, exchange and the provider fallback chain.

Purpose
-------
``DeliveryEngine`` runs one logical call across an ordered chain of providers
(primary first, then each fallback). Each provider is tried at most once with
at most one network exchange; the chain is consumed strictly in order. The
first success ends the call. When every link fails, the last failure is raised
verbatim with its provider-specific hint intact.

A fallback provider whose client cannot be built (unknown name, missing
credential) counts as that link's failed attempt with no exchange, and the
chain moves on.

Logging
-------
Structured events: ``delivery.start``, ``delivery.attempt_failed``,
``delivery.fallback`` and ``delivery.end``. Cache and stream events come from
the client and the stream decoder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest
from ..base.resilience.cache import ResponseCache, get_default_cache
from .api_client import ApiClient, ChunkSink


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a delivery.

    Attributes:
        text: Reply text.
        provider: Display name of the provider that answered.
        attempts: Number of chain links tried, including the successful one.
        cached: Whether the text came from the response cache.
    """

    text: str
    provider: str
    attempts: int
    cached: bool = False


ClientFactory = Callable[..., ApiClient]


class DeliveryEngine:
    """Run requests through a provider and its ordered fallback chain."""

    def __init__(
        self,
        provider: str,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        fallback_providers: Sequence[str] = (),
        cache: Optional[ResponseCache] = None,
        client_factory: ClientFactory = ApiClient,
    ) -> None:
        self.provider = provider
        self.api_key = api_key
        self.timeout = timeout
        self.fallback_providers = tuple(fallback_providers)
        self.cache = cache if cache is not None else get_default_cache()
        self._client_factory = client_factory
        self._logger = get_logger("echomind.delivery")

    @property
    def chain(self) -> List[str]:
        return [self.provider, *self.fallback_providers]

    def _client(self, name: str) -> ApiClient:
        return self._client_factory(name, api_key=self.api_key, timeout=self.timeout, cache=self.cache)

    def run(self, request: ChatRequest, on_chunk: Optional[ChunkSink] = None) -> DeliveryResult:
        """Deliver ``request``; stream to ``on_chunk`` when the request asks for it.

        Raises
        ------
        ProviderError
            The last failure once the chain is exhausted. A primary provider
            that cannot be built fails immediately only when no fallback is
            configured.
        """
        chain = self.chain
        streaming = request.is_streaming
        ctx = LogContext(provider=chain[0], model=request.model)
        normalized_log_event(
            self._logger,
            "delivery.start",
            ctx,
            phase="start",
            attempt=1,
            streaming=streaming,
            chain=chain,
        )

        last_error: Optional[ProviderError] = None
        for attempt, name in enumerate(chain, start=1):
            if attempt > 1:
                normalized_log_event(
                    self._logger,
                    "delivery.fallback",
                    LogContext(provider=name, model=request.model),
                    phase="fallback",
                    attempt=attempt,
                    previous_error=str(last_error) if last_error else None,
                )
            try:
                client = self._client(name)
                text, cached = client.send(request, on_chunk if streaming else None)
            except ProviderError as err:
                last_error = err
                normalized_log_event(
                    self._logger,
                    "delivery.attempt_failed",
                    LogContext(provider=err.provider or name, model=err.model or request.model),
                    phase="attempt",
                    attempt=attempt,
                    error_code=err.code.value,
                    emitted=False,
                    level=logging.WARNING,
                    status=err.status,
                    retryable=err.retryable,
                    error=str(err),
                )
                continue

            normalized_log_event(
                self._logger,
                "delivery.end",
                LogContext(provider=client.name, model=request.model),
                phase="end",
                attempt=attempt,
                emitted=True,
                cached=cached,
            )
            return DeliveryResult(text=text, provider=client.name, attempts=attempt, cached=cached)

        if last_error is None:  # pragma: no cover - chain always holds the primary
            raise ProviderError(code=ErrorCode.UNKNOWN, message="empty provider chain")
        normalized_log_event(
            self._logger,
            "delivery.end",
            ctx,
            phase="end",
            attempt=len(chain),
            error_code=last_error.code.value,
            emitted=False,
            level=logging.ERROR,
        )
        raise last_error


def deliver(
    request: ChatRequest,
    provider: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = 30,
    on_chunk: Optional[ChunkSink] = None,
    fallback_providers: Sequence[str] = (),
    cache: Optional[ResponseCache] = None,
) -> str:
    """Deliver ``request`` to ``provider`` and return the reply text.

    When ``on_chunk`` is given the request is streamed and each increment is
    passed to it as it arrives; otherwise the whole-body path (with the
    response cache) is used.
    """
    if on_chunk is not None and not request.is_streaming:
        request = request.with_changes(stream=True)
    engine = DeliveryEngine(
        provider,
        api_key=api_key,
        timeout=timeout,
        fallback_providers=fallback_providers,
        cache=cache,
    )
    return engine.run(request, on_chunk).text


__all__ = [
    "DeliveryEngine",
    "DeliveryResult",
    "deliver",
]
