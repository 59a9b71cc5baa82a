"""Unit tests for the shared httpx client pool."""
from __future__ import annotations

from echomind.base.constants import USER_AGENT
from echomind.base.http import close_all_clients, get_httpx_client


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_purpose_returns_same_instance():
    assert get_httpx_client("chat") is get_httpx_client("chat")  # nosec B101


def test_different_purpose_returns_different_instances():
    assert get_httpx_client("chat") is not get_httpx_client("models")  # nosec B101


def test_closed_client_is_replaced():
    c1 = get_httpx_client("chat")
    c1.close()
    c2 = get_httpx_client("chat")
    assert c2 is not c1 and not c2.is_closed  # nosec B101


def test_user_agent_header():
    assert get_httpx_client("chat").headers["User-Agent"] == USER_AGENT  # nosec B101
