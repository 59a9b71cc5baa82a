"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

``httpx`` timeouts and transport failures are told apart so callers can choose
between lengthening a deadline and switching providers. Non-2xx responses are
wrapped uniformly with the status preserved and a hint attached.
"""
from __future__ import annotations

import json
from typing import Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def hint_for_status(status: int, label: str = "") -> str:
    """Return a remediation hint for a non-2xx status.

    ``label`` names the service in the hint (e.g. ``"Gemini "``); pass an
    empty string for the generic wording.
    """
    if status == 400:
        return "Check your request format and model name."
    if status == 401:
        return f"Check your {label}API key is correct and has the right permissions."
    if status == 403:
        return "Your API key may not have access to this resource or may be expired."
    if status == 429:
        return "Rate limit exceeded. Try again later or reduce request frequency."
    if 500 <= status <= 599:
        return f"Server error. The {label}API service may be down, try again later."
    return f"Check the {label}API documentation for this status code."


def is_retryable(code: ErrorCode, status: Optional[int] = None) -> bool:
    """Return True for failures that are likely transient."""
    if code in (ErrorCode.TRANSPORT, ErrorCode.TIMEOUT):
        return True
    return code is ErrorCode.API and status is not None and (status == 429 or status >= 500)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeouts (``httpx`` and builtin).
        3. Other ``httpx`` transport failures.
        4. JSON decoding failures.
        5. Status-bearing exceptions.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSPORT
    if isinstance(exc, (json.JSONDecodeError, httpx.DecodingError)):
        return ErrorCode.PARSE
    if _extract_status(exc) is not None:
        return ErrorCode.API
    return ErrorCode.UNKNOWN


def wrap_exception(exc: BaseException, *, provider: str, model: Optional[str] = None) -> ProviderError:
    """Return ``exc`` as a :class:`ProviderError`, passing existing ones through."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    status = _extract_status(exc) if code is ErrorCode.API else None
    message = str(exc) or exc.__class__.__name__
    return ProviderError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        status=status,
        hint=hint_for_status(status) if status is not None else None,
        retryable=is_retryable(code, status),
        raw=exc if isinstance(exc, Exception) else None,
    )


def api_error(status: int, body: str, *, provider: str, model: Optional[str] = None, label: str = "") -> ProviderError:
    """Build the uniform ``API`` failure for a non-2xx response."""
    return ProviderError(
        code=ErrorCode.API,
        message=body or "Unknown error",
        provider=provider,
        model=model,
        status=status,
        hint=hint_for_status(status, label),
        retryable=is_retryable(ErrorCode.API, status),
    )


__all__ = [
    "api_error",
    "classify_exception",
    "hint_for_status",
    "is_retryable",
    "wrap_exception",
    "_extract_status",
]
