"""Pytest configuration for the echomind unit suite.

Every test runs with a hermetic environment: no credential variables, a
config file path inside ``tmp_path`` and an empty shared response cache.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from echomind.base.logging import BASE_LOGGER_NAME, get_logger
from echomind.base.resilience.cache import get_default_cache
from echomind.config.env import ENV_ALIASES, ENV_MAP

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


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"msg": record.getMessage()}
        payload["_level"] = record.levelno
        self.events.append(payload)


@pytest.fixture()
def captured_events() -> Iterator[List[Dict[str, Any]]]:
    """Collect structured events emitted anywhere in the ``echomind`` logger tree."""
    logger = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.events
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
