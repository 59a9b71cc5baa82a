from __future__ import annotations

import json
import types

import httpx
import pytest

from echomind.base.errors import (
    ErrorCode,
    ProviderError,
    api_error,
    classify_exception,
    hint_for_status,
    is_retryable,
    wrap_exception,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.MISSING_CREDENTIAL, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.MISSING_CREDENTIAL  # nosec B101 - assert is appropriate in unit tests
    assert wrap_exception(e, provider="y") is e  # nosec B101


def test_timeouts_are_distinguished_from_transport_failures():
    req = httpx.Request("POST", "https://x")
    assert classify_exception(httpx.ReadTimeout("slow", request=req)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectTimeout("slow", request=req)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused", request=req)) is ErrorCode.TRANSPORT  # nosec B101


def test_parse_and_status_mapping():
    assert classify_exception(json.JSONDecodeError("bad", "{", 0)) is ErrorCode.PARSE  # nosec B101
    assert classify_exception(types.SimpleNamespace(status_code=503)) is ErrorCode.API  # type: ignore[arg-type]  # nosec B101
    nested = types.SimpleNamespace(response=types.SimpleNamespace(status_code=404))
    assert classify_exception(nested) is ErrorCode.API  # type: ignore[arg-type]  # nosec B101
    assert classify_exception(RuntimeError("random")) is ErrorCode.UNKNOWN  # nosec B101


@pytest.mark.parametrize(
    "status,needle",
    [
        (400, "request format"),
        (401, "API key is correct"),
        (403, "may not have access"),
        (429, "Rate limit"),
        (500, "Server error"),
        (503, "Server error"),
        (418, "documentation"),
    ],
)
def test_hint_for_status(status, needle):
    assert needle in hint_for_status(status)  # nosec B101


def test_hint_label_names_the_service():
    assert "Gemini API key" in hint_for_status(401, "Gemini ")  # nosec B101


def test_retryable_classes():
    assert is_retryable(ErrorCode.TIMEOUT) and is_retryable(ErrorCode.TRANSPORT)  # nosec B101
    assert is_retryable(ErrorCode.API, 429) and is_retryable(ErrorCode.API, 502)  # nosec B101
    assert not is_retryable(ErrorCode.API, 401)  # nosec B101
    assert not is_retryable(ErrorCode.EMPTY_RESPONSE)  # nosec B101


def test_api_error_preserves_status_and_formats_message():
    err = api_error(429, "slow down", provider="openai", model="gpt-4o")
    assert err.status == 429 and err.retryable  # nosec B101
    assert str(err).startswith("API request failed with status 429: slow down.")  # nosec B101
    assert "Rate limit exceeded" in str(err)  # nosec B101
    assert api_error(500, "", provider="p").message == "Unknown error"  # nosec B101


def test_wrap_timeout_message():
    req = httpx.Request("GET", "https://x")
    err = wrap_exception(httpx.ReadTimeout("read timed out", request=req), provider="chat", model="m")
    assert err.code is ErrorCode.TIMEOUT and err.retryable  # nosec B101
    assert err.provider == "chat" and err.model == "m"  # nosec B101
    assert str(err).startswith("Request timed out: read timed out")  # nosec B101
