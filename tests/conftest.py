"""Shared fixtures for the delivery-path tests.

All HTTP goes through ``httpx.MockTransport``; nothing leaves the process.
"""

from __future__ import annotations

import json
from typing import Callable, Iterator, List

import httpx
import pytest

from echomind.base.resilience.cache import get_default_cache
from echomind.config.env import ENV_ALIASES, ENV_MAP

Handler = Callable[[httpx.Request], httpx.Response]

_CREDENTIAL_VARS = {"ECHOMIND_API_KEY", *ENV_MAP.values(), *(n for names in ENV_ALIASES.values() for n in names)}


@pytest.fixture(autouse=True)
def hermetic_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    for name in _CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in ("ECHOMIND_PROVIDER", "ECHOMIND_MODEL", "ECHOMIND_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ECHOMIND_CONFIG_FILE", str(tmp_path / "config.yaml"))
    get_default_cache().clear()
    yield
    get_default_cache().clear()


class Exchanges:
    """Recording wrapper around a request handler."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def __len__(self) -> int:
        return len(self.requests)

    @property
    def hosts(self) -> List[str]:
        return [r.url.host for r in self.requests]

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture()
def install_transport(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[Handler], Exchanges]]:
    """Route every ``ApiClient`` exchange through ``handler``."""
    clients: List[httpx.Client] = []

    def _install(handler: Handler) -> Exchanges:
        exchanges = Exchanges(handler)
        client = httpx.Client(transport=httpx.MockTransport(exchanges))
        clients.append(client)
        monkeypatch.setattr("echomind.service.api_client.get_httpx_client", lambda purpose="chat": client)
        return exchanges

    yield _install
    for c in clients:
        c.close()

