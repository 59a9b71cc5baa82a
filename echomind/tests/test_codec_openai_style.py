from __future__ import annotations

import pytest

from echomind.base.errors import ErrorCode, ProviderError
from echomind.base.models import ChatRequest, ContentPart, Message
from echomind.base.registry import Provider
from echomind.openai_style import OpenAIStyleCodec

codec = OpenAIStyleCodec()


def test_request_is_canonical_nearly_verbatim():
    req = ChatRequest.from_prompt("hi", system="sys", temperature=0.3)
    wire = codec.build_request(req, Provider.from_string("openai"), "sk-1")
    assert wire.url == "https://api.openai.com/v1/chat/completions"  # nosec B101
    assert wire.json == {  # nosec B101
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}],
        "temperature": 0.3,
    }
    assert wire.headers == {"Authorization": "Bearer sk-1"}  # nosec B101
    assert wire.params == {}  # nosec B101


def test_stream_flag_only_when_streaming_and_no_auth_without_key():
    req = ChatRequest.from_prompt("hi", model="m")
    wire = codec.build_request(req, Provider.from_string("chat"), None, stream=True)
    assert wire.json["stream"] is True  # nosec B101
    assert "Authorization" not in wire.headers  # nosec B101
    assert "stream" not in codec.build_request(req, Provider.from_string("chat"), None).json  # nosec B101


def test_image_parts_travel_as_image_url_objects():
    msg = Message.multimodal("user", [ContentPart.of_text("what"), ContentPart.of_image("data:image/png;base64,QQ==")])
    wire = codec.build_request(ChatRequest(messages=(msg,)), Provider.from_string("grok"), "k")
    assert wire.json["messages"][0]["content"][1] == {  # nosec B101
        "type": "image_url",
        "image_url": {"url": "data:image/png;base64,QQ=="},
    }


def test_decode_body_first_choice():
    data = {"choices": [{"message": {"role": "assistant", "content": "Hello"}}, {"message": {"content": "x"}}]}
    assert codec.decode_body(data) == "Hello"  # nosec B101


@pytest.mark.parametrize("data", [{}, {"choices": []}, {"choices": [{"message": {}}]}])
def test_decode_body_without_completion_is_empty_response(data):
    with pytest.raises(ProviderError) as ei:
        codec.decode_body(data)
    assert ei.value.code is ErrorCode.EMPTY_RESPONSE  # nosec B101


def test_decode_delta():
    assert codec.decode_delta({"choices": [{"delta": {"content": "Hel"}}]}) == "Hel"  # nosec B101
    assert codec.decode_delta({"choices": [{"delta": {"role": "assistant"}}]}) is None  # nosec B101
    assert codec.decode_delta({"choices": []}) is None  # nosec B101


@pytest.mark.parametrize(
    "data",
    [
        {"choices": [{"message": "x"}]},
        {"choices": [{"message": {"content": ["not", "text"]}}]},
        {"choices": ["x"]},
    ],
)
def test_decode_body_with_unexpected_shapes_is_empty_response(data):
    with pytest.raises(ProviderError) as ei:
        codec.decode_body(data)
    assert ei.value.code is ErrorCode.EMPTY_RESPONSE  # nosec B101


@pytest.mark.parametrize(
    "event",
    [{"choices": [{"delta": "oops"}]}, {"choices": [{"delta": None}]}, {"choices": "x"}],
)
def test_decode_delta_ignores_unexpected_shapes(event):
    assert codec.decode_delta(event) is None  # nosec B101
