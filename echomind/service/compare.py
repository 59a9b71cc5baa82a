"""Concurrent multi-model comparison.

Each target runs one independent delivery (no fallback chain) against its
own provider/model pair. Targets share nothing mutable except the response
cache. Results come back in input order whatever the completion order.
"""

from __future__ import annotations

import concurrent.futures as cf
from dataclasses import asdict, dataclass
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..base.errors import ErrorCode, ProviderError, wrap_exception
from ..base.models import ChatRequest
from ..base.resilience.cache import ResponseCache
from ..config.defaults import COMPARE_MAX_WORKERS, DEFAULT_PROVIDER
from .api_client import ApiClient

__all__ = [
    "CompareResult",
    "compare_models",
    "parse_targets",
    "resolve_target",
]


@dataclass
class CompareResult:
    """Outcome for one comparison target.

    Exactly one of ``text`` and ``error`` is set.
    """

    target: str
    provider: str
    model: str
    text: Optional[str] = None
    error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def resolve_target(target: str, default_provider: str = DEFAULT_PROVIDER) -> Tuple[str, str]:
    """Map a comparison target to ``(provider, model)``.

    ``gpt*`` goes to ``openai``, ``claude*`` to ``claude``, ``name/model``
    splits on the first slash, and anything else uses ``default_provider``.
    """
    name = target.strip()
    if name.startswith("gpt"):
        return "openai", name
    if name.startswith("claude"):
        return "claude", name
    if "/" in name:
        provider, _, model = name.partition("/")
        return provider, model or name
    return default_provider, name


def parse_targets(spec: str) -> List[str]:
    """Split a comma-separated target list, dropping blanks."""
    targets = [t.strip() for t in (spec or "").split(",") if t.strip()]
    if not targets:
        raise ProviderError(code=ErrorCode.CONFIG, message="No models specified for comparison")
    return targets


def _run_one(
    target: str,
    request: ChatRequest,
    default_provider: str,
    api_key: Optional[str],
    timeout: Optional[float],
    cache: Optional[ResponseCache],
) -> CompareResult:
    provider, model = resolve_target(target, default_provider)
    t0 = perf_counter()
    try:
        client = ApiClient(provider, api_key=api_key, timeout=timeout, cache=cache)
        text = client.send_message(request.with_changes(model=model, stream=None))
        return CompareResult(target, provider, model, text=text, duration_ms=(perf_counter() - t0) * 1000.0)
    except ProviderError as err:
        return CompareResult(target, provider, model, error=str(err), duration_ms=(perf_counter() - t0) * 1000.0)


def compare_models(
    prompt: str,
    models: Sequence[str],
    *,
    default_provider: str = DEFAULT_PROVIDER,
    system: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    cache: Optional[ResponseCache] = None,
    max_workers: int = COMPARE_MAX_WORKERS,
) -> List[CompareResult]:
    """Send ``prompt`` to every target concurrently.

    Returns
    -------
    list[CompareResult]
        One result per target, in the order given. A failing target records
        its error instead of aborting the others.
    """
    if not models:
        raise ProviderError(code=ErrorCode.CONFIG, message="No models specified for comparison")
    request = ChatRequest.from_prompt(
        prompt,
        system=system,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    workers = max(1, min(max_workers, len(models)))
    results: List[CompareResult] = [None] * len(models)  # type: ignore[list-item]
    with cf.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="echomind-compare") as executor:
        future_map = {
            executor.submit(_run_one, target, request, default_provider, api_key, timeout, cache): index
            for index, target in enumerate(models)
        }
        for fut in cf.as_completed(future_map):
            index = future_map[fut]
            try:
                results[index] = fut.result()
            except Exception as exc:  # noqa: BLE001 - one target must not abort the rest
                provider, model = resolve_target(models[index], default_provider)
                err = wrap_exception(exc, provider=provider, model=model)
                results[index] = CompareResult(models[index], provider, model, error=str(err))
    return results
