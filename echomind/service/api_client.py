"""Per-provider transport client.

Purpose
-------
``ApiClient`` binds one resolved provider, its codec, a credential and a
deadline, and performs at most one network exchange per call:

1. CacheCheck (whole-body only): a hit returns immediately.
2. Send: translate with the codec and POST through the pooled ``httpx`` client.
3. Decode: whole-body JSON, or an incremental event stream.
4. CacheStore (whole-body only).

Streaming requests never read or write the cache. Providers without a native
incremental form are streamed by emulation: one whole-body exchange and a
single sink call carrying the entire text.

Timeout strategy
----------------
Each request passes its own ``httpx.Timeout`` built by ``get_timeout_config``,
which bounds every single read. A wall-clock ``Deadline`` started per exchange
is checked between body reads and caps the exchange as a whole. Either
expiry surfaces as ``ErrorCode.TIMEOUT``.

Whole-body replies that decode to an empty string are returned but not
cached.

Failure modes
-------------
Every failure is raised as ``ProviderError`` stamped with the provider display
name and model. Construction fails with ``MISSING_CREDENTIAL`` when a provider
that needs a credential has none.
"""

from __future__ import annotations

import json
import time
from typing import Callable, ContextManager, Dict, List, Optional, Tuple, Union

import httpx

from ..base.errors import ErrorCode, ProviderError, api_error, wrap_exception
from ..base.http import get_httpx_client
from ..base.interfaces import WireRequest
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatRequest
from ..base.registry import Provider, ProviderKind
from ..base.resilience.cache import ResponseCache, fingerprint, get_default_cache
from ..base.streaming import decode_event_stream
from ..base.timeouts import Deadline, get_timeout_config
from ..config.defaults import GEMINI_MODELS_ENDPOINT
from ..config.env import resolve_provider_key

ChunkSink = Callable[[str], None]


class ApiClient:
    """Transport client for a single provider."""

    def __init__(
        self,
        provider: Union[str, Provider],
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        cache: Optional[ResponseCache] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider if isinstance(provider, Provider) else Provider.from_string(provider)
        self.codec = self.provider.codec()
        self.cache = cache if cache is not None else get_default_cache()
        self._timeout_seconds = timeout
        self._timeout = get_timeout_config().for_request(timeout)
        self._clock = clock
        self._logger = get_logger("echomind.client")
        self._api_key = self._resolve_credential(api_key)

    def _resolve_credential(self, explicit: Optional[str]) -> Optional[str]:
        if explicit and explicit.strip():
            return explicit.strip()
        value, _env = resolve_provider_key(self.provider.display_name())
        if value is None and self.provider.requires_credential():
            raise ProviderError(
                code=ErrorCode.MISSING_CREDENTIAL,
                message=(
                    f"API key is required for provider '{self.provider}'. "
                    "Pass --api-key, set ECHOMIND_API_KEY, or add api.api_key to the config file."
                ),
                provider=self.provider.display_name(),
            )
        return value

    @property
    def name(self) -> str:
        return self.provider.display_name()

    def _ctx(self, model: Optional[str]) -> LogContext:
        return LogContext(provider=self.name, model=model)

    def _stamp(self, err: ProviderError, model: Optional[str]) -> ProviderError:
        if err.provider == "unknown":
            err.provider = self.name
        if err.model is None:
            err.model = model
        return err

    # ---- public operations ----

    def send_message(self, request: ChatRequest) -> str:
        """Return the complete reply text, served from the cache when possible."""
        text, _cached = self.send(request.with_changes(stream=None))
        return text

    def send_message_stream(self, request: ChatRequest, on_chunk: ChunkSink) -> str:
        """Deliver the reply incrementally to ``on_chunk`` and return the full text."""
        text, _cached = self.send(request.with_changes(stream=True), on_chunk)
        return text

    def send(self, request: ChatRequest, on_chunk: Optional[ChunkSink] = None) -> Tuple[str, bool]:
        """Run one exchange; return ``(text, served_from_cache)``.

        The request's ``stream`` flag selects the path.
        """
        model = self.codec.resolve_model(request)
        try:
            if request.is_streaming:
                return self._send_streaming(request, on_chunk), False
            return self._send_cached(request, model)
        except ProviderError as err:
            raise self._stamp(err, model) from err.raw
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            raise wrap_exception(exc, provider=self.name, model=model) from exc

    def list_models(self) -> List[Dict[str, str]]:
        """Return ``[{name, description}]`` from the provider's model listing.

        Only Gemini exposes a listing through this client.
        """
        if self.provider.kind is not ProviderKind.GEMINI:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"Model listing is not supported for provider '{self.provider}'",
                provider=self.name,
            )
        from ..gemini.codec import parse_model_listing

        try:
            resp = get_httpx_client().get(
                GEMINI_MODELS_ENDPOINT,
                params={"key": self._api_key} if self._api_key else None,
                timeout=self._timeout,
            )
            self._raise_for_status(resp, resp.content, None)
            return parse_model_listing(self._json(resp.content))
        except ProviderError as err:
            raise self._stamp(err, None) from err.raw
        except httpx.HTTPError as exc:
            raise wrap_exception(exc, provider=self.name) from exc

    # ---- exchange paths ----

    def _send_cached(self, request: ChatRequest, model: str) -> Tuple[str, bool]:
        key = fingerprint(self.name, self.provider.endpoint_template, request)
        ctx = self._ctx(model)
        cached = self.cache.lookup(key)
        if cached is not None:
            log_event(self._logger, "cache.hit", ctx, fingerprint=key[:16])
            return cached, True
        text = self._exchange_whole(request, model)
        if text:
            self.cache.store(key, text)
            log_event(self._logger, "cache.store", ctx, fingerprint=key[:16], size=len(text))
        return text, False

    def _send_streaming(self, request: ChatRequest, on_chunk: Optional[ChunkSink]) -> str:
        model = self.codec.resolve_model(request)
        if not self.codec.native_streaming:
            text = self._exchange_whole(request, model)
            if on_chunk is not None:
                on_chunk(text)
            return text

        wire = self.codec.build_request(request, self.provider, self._api_key, stream=True)
        deadline = self._deadline()
        with self._open(wire) as resp:
            if not resp.is_success:
                self._raise_for_status(resp, self._read_body(resp, deadline), model)
            return decode_event_stream(
                resp.iter_bytes(),
                self.codec.decode_delta,
                on_chunk,
                framing=self.codec.stream_framing,  # type: ignore[arg-type]
                logger=self._logger,
                ctx=self._ctx(model),
                deadline=deadline,
            )

    def _exchange_whole(self, request: ChatRequest, model: str) -> str:
        wire = self.codec.build_request(request, self.provider, self._api_key, stream=False)
        deadline = self._deadline()
        with self._open(wire) as resp:
            body = self._read_body(resp, deadline)
            if not resp.is_success:
                self._raise_for_status(resp, body, model)
        return self.codec.decode_body(self._json(body))

    def _deadline(self) -> Deadline:
        return get_timeout_config().deadline(self._timeout_seconds, clock=self._clock)

    def _open(self, wire: WireRequest) -> ContextManager[httpx.Response]:
        return get_httpx_client().stream(
            "POST",
            wire.url,
            json=wire.json,
            headers=wire.headers,
            params=wire.params or None,
            timeout=self._timeout,
        )

    @staticmethod
    def _read_body(resp: httpx.Response, deadline: Deadline) -> bytes:
        buf = bytearray()
        for chunk in resp.iter_bytes():
            deadline.check()
            buf.extend(chunk)
        return bytes(buf)

    def _raise_for_status(self, resp: httpx.Response, body: bytes, model: Optional[str]) -> None:
        if resp.is_success:
            return
        try:
            text = body.decode(resp.charset_encoding or "utf-8", errors="replace")
        except LookupError:
            text = body.decode("utf-8", errors="replace")
        raise api_error(
            resp.status_code,
            text.strip(),
            provider=self.name,
            model=model,
            label=self.codec.hint_label,
        )

    def _json(self, body: bytes) -> Dict:
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.PARSE,
                message=f"Failed to parse response: {exc}",
                provider=self.name,
                raw=exc,
            ) from exc
        if not isinstance(data, dict):
            raise ProviderError(
                code=ErrorCode.PARSE,
                message="Failed to parse response: expected a JSON object",
                provider=self.name,
            )
        return data


__all__ = ["ApiClient", "ChunkSink"]
