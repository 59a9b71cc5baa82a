from __future__ import annotations

import pytest

from echomind.base.errors import ErrorCode, ProviderError
from echomind.config.env import get_env_var_candidates, resolve_provider_key
from echomind.service.api_client import ApiClient


def test_candidates_start_with_shared_variable():
    assert list(get_env_var_candidates("gemini")) == ["ECHOMIND_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"]  # nosec B101
    assert list(get_env_var_candidates("custom")) == ["ECHOMIND_API_KEY"]  # nosec B101


def test_shared_variable_wins_over_provider_variable(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "provider")
    assert resolve_provider_key("openai") == ("provider", "OPENAI_API_KEY")  # nosec B101
    monkeypatch.setenv("ECHOMIND_API_KEY", "shared")
    assert resolve_provider_key("openai") == ("shared", "ECHOMIND_API_KEY")  # nosec B101


def test_blank_values_are_ignored(monkeypatch):
    monkeypatch.setenv("ECHOMIND_API_KEY", "   ")
    monkeypatch.setenv("GOOGLE_API_KEY", "g")
    assert resolve_provider_key("gemini") == ("g", "GOOGLE_API_KEY")  # nosec B101


def test_missing_credential_fails_at_construction():
    with pytest.raises(ProviderError) as ei:
        ApiClient("openai")
    assert ei.value.code is ErrorCode.MISSING_CREDENTIAL  # nosec B101
    assert ei.value.provider == "openai"  # nosec B101


def test_keyless_providers_construct_without_credential():
    assert ApiClient("chat")._api_key is None  # nosec B101
    assert ApiClient("ollama")._api_key is None  # nosec B101


def test_explicit_key_wins(monkeypatch):
    monkeypatch.setenv("ECHOMIND_API_KEY", "env")
    assert ApiClient("openai", api_key="explicit")._api_key == "explicit"  # nosec B101
    assert ApiClient("openai")._api_key == "env"  # nosec B101
