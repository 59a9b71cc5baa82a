from __future__ import annotations

import pytest

from echomind.anthropic import AnthropicCodec
from echomind.base.errors import ErrorCode, ProviderError
from echomind.base.models import ChatRequest, ContentPart, Message
from echomind.base.registry import Provider
from echomind.ollama import OllamaCodec

anthropic = AnthropicCodec()
ollama = OllamaCodec()


def test_anthropic_lifts_system_and_fills_max_tokens():
    req = ChatRequest.from_prompt("hi", system="be terse", top_k=5)
    wire = anthropic.build_request(req, Provider.from_string("claude"), "ak")
    assert wire.url == "https://api.anthropic.com/v1/messages"  # nosec B101
    assert wire.json == {  # nosec B101
        "model": "claude-3-5-sonnet-latest",
        "max_tokens": 1024,
        "messages": [{"role": "user", "content": "hi"}],
        "system": "be terse",
        "top_k": 5,
    }
    assert wire.headers == {"anthropic-version": "2023-06-01", "x-api-key": "ak"}  # nosec B101


def test_anthropic_base64_images_become_image_blocks():
    msg = Message.multimodal("user", [ContentPart.of_image("data:image/gif;base64,R0lG"), ContentPart.of_text("?")])
    wire = anthropic.build_request(ChatRequest(messages=(msg,)), Provider.from_string("claude"), "k", stream=True)
    blocks = wire.json["messages"][0]["content"]
    assert blocks[0] == {"type": "image", "source": {"type": "base64", "media_type": "image/gif", "data": "R0lG"}}  # nosec B101
    assert blocks[1] == {"type": "text", "text": "?"}  # nosec B101
    assert wire.json["stream"] is True  # nosec B101


def test_anthropic_decode_body_and_deltas():
    assert anthropic.decode_body({"content": [{"type": "tool_use"}, {"type": "text", "text": "ok"}]}) == "ok"  # nosec B101
    with pytest.raises(ProviderError) as ei:
        anthropic.decode_body({"content": []})
    assert ei.value.code is ErrorCode.EMPTY_RESPONSE  # nosec B101
    delta = {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hi"}}
    assert anthropic.decode_delta(delta) == "Hi"  # nosec B101
    assert anthropic.decode_delta({"type": "message_start", "message": {}}) is None  # nosec B101


def test_ollama_always_sends_stream_and_maps_options():
    req = ChatRequest.from_prompt("q", max_tokens=20, temperature=0.5)
    wire = ollama.build_request(req, Provider.from_string("ollama"), None)
    assert wire.url == "http://localhost:11434/api/chat"  # nosec B101
    assert wire.json == {  # nosec B101
        "model": "llama3",
        "messages": [{"role": "user", "content": "q"}],
        "stream": False,
        "options": {"temperature": 0.5, "num_predict": 20},
    }
    assert wire.headers == {}  # nosec B101
    assert ollama.build_request(req, Provider.from_string("ollama"), None, stream=True).json["stream"] is True  # nosec B101


def test_ollama_images_carry_base64_payload_only():
    msg = Message.multimodal("user", [ContentPart.of_text("describe"), ContentPart.of_image("data:image/png;base64,iVBO")])
    wire = ollama.build_request(ChatRequest(messages=(msg,)), Provider.from_string("ollama"), None)
    assert wire.json["messages"][0] == {"role": "user", "content": "describe", "images": ["iVBO"]}  # nosec B101


def test_ollama_decode():
    assert ollama.stream_framing == "ndjson"  # nosec B101
    assert ollama.decode_body({"message": {"role": "assistant", "content": "hey"}, "done": True}) == "hey"  # nosec B101
    assert ollama.decode_delta({"message": {"content": "He"}, "done": False}) == "He"  # nosec B101
    assert ollama.decode_delta({"done": True}) is None  # nosec B101
    with pytest.raises(ProviderError):
        ollama.decode_body({"error": "model not found"})


@pytest.mark.parametrize(
    "event",
    [
        {"type": "content_block_delta", "delta": "oops"},
        {"type": "content_block_delta", "delta": ["x"]},
        {"type": "content_block_delta"},
    ],
)
def test_anthropic_delta_with_unexpected_shape_is_ignored(event):
    assert anthropic.decode_delta(event) is None  # nosec B101


def test_anthropic_body_with_unexpected_shape_is_empty_response():
    with pytest.raises(ProviderError) as ei:
        anthropic.decode_body({"content": "plain string"})
    assert ei.value.code is ErrorCode.EMPTY_RESPONSE  # nosec B101
