from __future__ import annotations

import json
import logging

from echomind.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    _parse_level,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from echomind.base.log_support import JsonFormatter


def test_child_loggers_live_under_echomind():
    assert get_logger("cache").name == "echomind.cache"  # nosec B101
    assert get_logger("echomind.delivery").name == "echomind.delivery"  # nosec B101
    assert get_logger().propagate is False  # nosec B101


def test_parse_level_defaults_to_warning():
    assert _parse_level(None) == logging.WARNING  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("bogus") == logging.WARNING  # nosec B101


def test_log_event_merges_context_and_drops_none(captured_events):
    log_event(get_logger("t"), "cache.hit", LogContext(provider="openai", model="m"), fingerprint="ab", extra=None)
    evt = captured_events[-1]
    assert evt["event"] == "cache.hit" and evt["provider"] == "openai" and evt["model"] == "m"  # nosec B101
    assert "extra" not in evt  # nosec B101


def test_normalized_event_always_carries_keys(captured_events):
    normalized_log_event(get_logger("t"), "delivery.start", None, phase="start", attempt=None, attempt_x=1)
    evt = captured_events[-1]
    for key in ("phase", "attempt", "emitted"):
        assert key in evt  # nosec B101
    assert "error_code" not in evt  # nosec B101
    assert set(REQUIRED_NORMALIZED_KEYS) >= {"phase", "attempt", "error_code", "emitted"}  # nosec B101


def test_normalized_event_keeps_false_emitted(captured_events):
    normalized_log_event(get_logger("t"), "delivery.end", None, phase="end", attempt=2, emitted=False, error_code="api")
    evt = captured_events[-1]
    assert evt["emitted"] is False and evt["attempt"] == 2 and evt["error_code"] == "api"  # nosec B101


def test_json_formatter_hoists_event_payload():
    record = logging.LogRecord("echomind.t", logging.INFO, __file__, 1, json.dumps({"event": "e", "k": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["k"] == 1 and out["level"] == "INFO"  # nosec B101
    assert "msg" not in out  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "echomind.log"
    logger = configure_logger(file_path=str(path))
    try:
        assert any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101
    finally:
        configure_logger(file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(path) for h in logger.handlers)  # nosec B101
