"""Streaming through ``ApiClient`` for native and emulated providers."""

from __future__ import annotations

import json
from typing import Callable, List, Tuple

import httpx
import pytest

from echomind.base.errors import ErrorCode, ProviderError
from echomind.base.models import ChatRequest
from echomind.service.api_client import ApiClient


def _collect() -> Tuple[List[str], Callable[[str], None]]:
    chunks: List[str] = []
    return chunks, chunks.append


def test_sse_split_across_reads(install_transport):
    parts = [
        b'data: {"choices":[{"delta":{"content":"Hel"}}]}\n',
        b'\ndata: {"choices":[{"delta":{"con',
        b'tent":"lo"}}]}\n\ndata: [DONE]\n\n',
    ]
    exchanges = install_transport(lambda request: httpx.Response(200, content=iter(parts)))
    chunks, sink = _collect()

    text = ApiClient("chat").send_message_stream(ChatRequest.from_prompt("hi"), sink)

    assert text == "Hello" and chunks == ["Hel", "lo"]  # nosec B101
    assert exchanges.body()["stream"] is True  # nosec B101


def test_malformed_line_is_skipped(install_transport):
    body = b'data: {"choices":[{"delta":{"content":"a"}}]}\n\ndata: {oops\n\ndata: {"choices":[{"delta":{"content":"b"}}]}\n\n'
    install_transport(lambda request: httpx.Response(200, content=body))
    chunks, sink = _collect()
    assert ApiClient("chat").send_message_stream(ChatRequest.from_prompt("hi"), sink) == "ab"  # nosec B101
    assert chunks == ["a", "b"]  # nosec B101


def test_cohere_stream_is_emulated_with_single_chunk(install_transport):
    exchanges = install_transport(lambda request: httpx.Response(200, json={"text": "whole reply"}))
    chunks, sink = _collect()

    text = ApiClient("cohere", api_key="k").send_message_stream(ChatRequest.from_prompt("hi"), sink)

    assert text == "whole reply" and chunks == ["whole reply"]  # nosec B101
    assert "stream" not in exchanges.body()  # nosec B101
    assert exchanges.requests[0].headers["authorization"] == "Bearer k"  # nosec B101


def test_gemini_stream_is_emulated_and_keyed_by_query(install_transport):
    reply = {"candidates": [{"content": {"parts": [{"text": "Hi "}, {"text": "there"}]}}]}
    exchanges = install_transport(lambda request: httpx.Response(200, json=reply))
    chunks, sink = _collect()

    text = ApiClient("gemini", api_key="g").send_message_stream(ChatRequest.from_prompt("hi"), sink)

    assert text == "Hi there" and chunks == ["Hi there"]  # nosec B101
    url = exchanges.requests[0].url
    assert url.path.endswith("/models/gemini-pro:generateContent")  # nosec B101
    assert url.params["key"] == "g"  # nosec B101


def test_anthropic_event_stream(install_transport):
    events = [
        {"type": "message_start", "message": {"id": "m"}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Bon"}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "jour"}},
        {"type": "message_stop"},
    ]
    body = "".join(f"event: {e['type']}\ndata: {json.dumps(e)}\n\n" for e in events).encode()
    exchanges = install_transport(lambda request: httpx.Response(200, content=body))
    chunks, sink = _collect()

    text = ApiClient("claude", api_key="a").send_message_stream(ChatRequest.from_prompt("hi"), sink)

    assert text == "Bonjour" and chunks == ["Bon", "jour"]  # nosec B101
    req = exchanges.requests[0]
    assert req.headers["x-api-key"] == "a" and "anthropic-version" in req.headers  # nosec B101
    assert exchanges.body()["stream"] is True  # nosec B101


def test_ollama_ndjson_stream(install_transport):
    lines = [
        {"message": {"role": "assistant", "content": "one "}, "done": False},
        {"message": {"role": "assistant", "content": "two"}, "done": True},
    ]
    body = "".join(json.dumps(x) + "\n" for x in lines).encode()
    exchanges = install_transport(lambda request: httpx.Response(200, content=body))
    chunks, sink = _collect()

    text = ApiClient("ollama").send_message_stream(ChatRequest.from_prompt("hi"), sink)

    assert text == "one two" and chunks == ["one ", "two"]  # nosec B101
    assert exchanges.body()["stream"] is True  # nosec B101
    assert "authorization" not in exchanges.requests[0].headers  # nosec B101


def test_non_success_stream_is_api_error(install_transport):
    install_transport(lambda request: httpx.Response(401, text="invalid key"))
    chunks, sink = _collect()
    with pytest.raises(ProviderError) as ei:
        ApiClient("openai", api_key="k").send_message_stream(ChatRequest.from_prompt("hi"), sink)
    err = ei.value
    assert err.code is ErrorCode.API and err.status == 401  # nosec B101
    assert err.provider == "openai" and err.model == "gpt-3.5-turbo"  # nosec B101
    assert "invalid key" in str(err) and "Check your API key" in str(err)  # nosec B101
    assert chunks == []  # nosec B101


def test_sink_failure_propagates(install_transport):
    body = b'data: {"choices":[{"delta":{"content":"a"}}]}\n\n'
    install_transport(lambda request: httpx.Response(200, content=body))

    def sink(_chunk: str) -> None:
        raise BrokenPipeError("closed")

    with pytest.raises(BrokenPipeError):
        ApiClient("chat").send_message_stream(ChatRequest.from_prompt("hi"), sink)


def test_custom_url_provider(install_transport):
    exchanges = install_transport(
        lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "custom"}}]})
    )
    client = ApiClient("https://llm.internal/v1/chat/completions", api_key="c")
    assert client.send_message(ChatRequest.from_prompt("hi", model="local")) == "custom"  # nosec B101
    assert str(exchanges.requests[0].url) == "https://llm.internal/v1/chat/completions"  # nosec B101
    assert exchanges.body()["model"] == "local"  # nosec B101


def test_wrongly_shaped_delta_is_skipped(install_transport):
    body = (
        b'data: {"choices":[{"delta":"oops"}]}\n'
        b'data: {"choices":[{"delta":{"content":"ok"}}]}\n'
        b"data: [DONE]\n"
    )
    install_transport(lambda request: httpx.Response(200, content=body))
    chunks, sink = _collect()
    assert ApiClient("chat").send_message_stream(ChatRequest.from_prompt("hi"), sink) == "ok"  # nosec B101
    assert chunks == ["ok"]  # nosec B101


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_trickling_stream_hits_overall_deadline(install_transport):
    clock = _Clock()

    def trickle():
        yield b'data: {"choices":[{"delta":{"content":"a"}}]}\n'
        clock.now += 20
        yield b'data: {"choices":[{"delta":{"content":"b"}}]}\n'

    install_transport(lambda request: httpx.Response(200, content=trickle()))
    chunks, sink = _collect()

    with pytest.raises(ProviderError) as ei:
        ApiClient("chat", timeout=10, clock=clock).send_message_stream(ChatRequest.from_prompt("hi"), sink)

    assert ei.value.code is ErrorCode.TIMEOUT and ei.value.provider == "chat"  # nosec B101
    assert chunks == ["a"]  # nosec B101
