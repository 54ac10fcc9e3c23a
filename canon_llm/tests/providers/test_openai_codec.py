import json

import pytest

from canon_llm.base.constants import STRUCTURED_OUTPUT_TOOL
from canon_llm.base.dto.request_options import RequestOptions
from canon_llm.base.errors import APIResponseError, APIStreamError, ErrorCode, InvalidParameter
from canon_llm.base.models import (
    Context,
    ImagePart,
    Message,
    Model,
    TextPart,
    Tool,
    ToolCall,
    ToolResultPart,
)
from canon_llm.base.result import Failure, Success
from canon_llm.base.streaming import iter_canonical_chunks, join_stream
from canon_llm.base.models import Response
from canon_llm.base.wire import StreamEvent, WireResponse
from canon_llm.openai.codec import OpenAICodec

MODEL = Model.from_spec("openai:gpt-4o-mini")


@pytest.fixture()
def codec():
    return OpenAICodec()


def _sse(payload):
    return StreamEvent(event=None, data=payload if isinstance(payload, str) else json.dumps(payload))


def _delta(delta=None, finish_reason=None, **extra):
    choice = {"index": 0, "delta": delta or {}, "finish_reason": finish_reason}
    return _sse({"id": "chatcmpl-1", "model": "gpt-4o-mini", "choices": [choice], **extra})


# ----------------------------------------------------------------- encoding


def test_encode_request_basic_shape(codec):
    ctx = Context.of(Context.system("be terse"), Context.user("hi"))
    opts = RequestOptions.parse({"temperature": 0.3, "max_tokens": 64, "stop": ["\n"]})
    req = codec.encode_request(ctx, MODEL, opts, "sk-test")
    assert req.method == "POST"  # nosec B101
    assert req.url == "https://api.openai.com/v1/chat/completions"  # nosec B101
    assert req.headers["authorization"] == "Bearer sk-test"  # nosec B101
    assert req.body == {  # nosec B101
        "model": "gpt-4o-mini",
        "messages": [
            {"role": "system", "content": "be terse"},
            {"role": "user", "content": "hi"},
        ],
        "temperature": 0.3,
        "max_tokens": 64,
        "stop": ["\n"],
    }
    assert req.stream is False  # nosec B101


def test_encode_streaming_requests_usage(codec):
    req = codec.encode_request(Context.of(Context.user("hi")), MODEL, RequestOptions.parse({"stream": True}), "k")
    assert req.body["stream"] is True  # nosec B101
    assert req.body["stream_options"] == {"include_usage": True}  # nosec B101
    assert req.stream is True  # nosec B101


def test_encode_tools_tool_calls_and_results(codec):
    tool = Tool(name="get_weather", description="Weather", parameter_schema={"type": "object"})
    ctx = Context.of(
        Context.user("weather?"),
        Message(
            role="assistant",
            content=[],
            tool_calls=[ToolCall(name="get_weather", arguments={"city": "Paris"}, id="call_1")],
        ),
        Message(
            role="tool",
            content=[
                ToolResultPart(tool_call_id="call_1", output={"temp": 21}),
                ToolResultPart(tool_call_id="call_2", output="sunny"),
            ],
        ),
        tools=[tool],
    )
    body = codec.encode_request(ctx, MODEL, RequestOptions.parse({}), "k").body
    assert body["tools"] == [tool.to_openai_format()]  # nosec B101
    assistant = body["messages"][1]
    assert assistant["content"] is None  # nosec B101
    assert assistant["tool_calls"] == [  # nosec B101
        {"id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": '{"city": "Paris"}'}}
    ]
    assert body["messages"][2:] == [  # nosec B101
        {"role": "tool", "tool_call_id": "call_1", "content": '{"temp": 21}'},
        {"role": "tool", "tool_call_id": "call_2", "content": "sunny"},
    ]


def test_encode_multimodal_content_uses_array_form(codec):
    ctx = Context.of(Context.user([TextPart("what is this?"), ImagePart(data=b"\x89PNG", media_type="image/png")]))
    content = codec.encode_request(ctx, MODEL, RequestOptions.parse({}), "k").body["messages"][0]["content"]
    assert content == [  # nosec B101
        {"type": "text", "text": "what is this?"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,iVBORw=="}},
    ]


def test_encode_honours_base_url_and_provider_options(codec):
    opts = RequestOptions.parse({"base_url": "https://gw.example/v1/", "provider_options": {"seed": 7}})
    req = codec.encode_request(Context.of(Context.user("hi")), MODEL, opts, "k", {"organization": "org-1"})
    assert req.url == "https://gw.example/v1/chat/completions"  # nosec B101
    assert req.body["seed"] == 7  # nosec B101
    assert req.headers["openai-organization"] == "org-1"  # nosec B101


# ----------------------------------------------------------------- decoding


def test_decode_success(codec):
    body = {
        "id": "chatcmpl-1",
        "model": "gpt-4o-mini-2024-07-18",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": "Hello!",
                    "tool_calls": [
                        {"id": "call_1", "type": "function", "function": {"name": "f", "arguments": '{"a": 1}'}}
                    ],
                },
                "finish_reason": "tool_calls",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
        "system_fingerprint": "fp_1",
    }
    ctx = Context.of(Context.user("hi"))
    result = codec.decode_response(WireResponse(status=200, body=body), MODEL, ctx)
    assert isinstance(result, Success)  # nosec B101
    resp = result.value
    assert resp.id == "chatcmpl-1"  # nosec B101
    assert resp.model == "gpt-4o-mini-2024-07-18"  # nosec B101
    assert resp.context is ctx  # nosec B101
    assert resp.message.content == [TextPart("Hello!")]  # nosec B101
    assert resp.message.tool_calls == [ToolCall(name="f", arguments={"a": 1}, id="call_1")]  # nosec B101
    assert resp.finish_reason == "tool_calls"  # nosec B101
    assert resp.usage["total_tokens"] == 7  # nosec B101
    assert resp.provider_meta == {"system_fingerprint": "fp_1"}  # nosec B101
    assert resp.streaming is False  # nosec B101


def test_decode_structured_output_sets_object(codec):
    call = {"id": "c", "type": "function", "function": {"name": STRUCTURED_OUTPUT_TOOL, "arguments": '{"name": "Ada"}'}}
    body = {"id": "x", "choices": [{"message": {"content": None, "tool_calls": [call]}, "finish_reason": "stop"}]}
    resp = codec.decode_response(WireResponse(status=200, body=body), MODEL, Context()).value
    assert resp.object == {"name": "Ada"}  # nosec B101
    assert resp.message.content == [TextPart("")]  # nosec B101


def test_decode_error_status_returns_failure(codec, log_capture):
    body = {"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}}
    result = codec.decode_response(WireResponse(status=401, body=json.dumps(body)), MODEL, Context())
    assert isinstance(result, Failure)  # nosec B101
    err = result.error
    assert isinstance(err, APIResponseError)  # nosec B101
    assert err.code is ErrorCode.AUTH  # nosec B101
    assert err.message == "OpenAI API error: Incorrect API key provided"  # nosec B101
    assert any(e["event"] == "response.error" and e["error_code"] == "auth" for e in log_capture.events())  # nosec B101


@pytest.mark.parametrize(
    "body",
    [
        {"id": "x", "choices": [{"message": "hello"}]},
        {"id": "x", "choices": [{"message": {"tool_calls": [{"id": "c", "function": "oops"}]}}]},
        {"id": "x", "choices": [{"message": {"content": "hi"}}], "system_fingerprint": ["fp"], "usage": 3},
    ],
)
def test_decode_tolerates_odd_message_shapes(codec, body):
    result = codec.decode_response(WireResponse(status=200, body=body), MODEL, Context())
    assert isinstance(result, Success)  # nosec B101
    assert result.value.id == "x"  # nosec B101


def test_decode_unexpected_body_is_a_failure_not_an_exception(codec, monkeypatch, log_capture):
    def explode(body, model, context):
        raise KeyError("choices")

    monkeypatch.setattr(codec, "_build_response", explode)
    result = codec.decode_response(WireResponse(status=200, body={"id": "x"}), MODEL, Context())
    assert isinstance(result, Failure)  # nosec B101
    assert isinstance(result.error, APIResponseError)  # nosec B101
    assert result.error.message.startswith("OpenAI API returned an unexpected body")  # nosec B101
    assert isinstance(result.error.raw, KeyError)  # nosec B101
    assert result.error.__cause__ is result.error.raw  # nosec B101
    assert any(e["event"] == "response.error" for e in log_capture.events())  # nosec B101


def test_extract_usage(codec):
    assert codec.extract_usage({"usage": {"prompt_tokens": 1}}, MODEL) == {"prompt_tokens": 1}  # nosec B101
    assert codec.extract_usage({"usage": None}, MODEL) is None  # nosec B101
    assert codec.extract_usage("oops", MODEL) is None  # nosec B101


# ---------------------------------------------------------------- streaming


def _decode_all(codec, events):
    state = codec.new_stream_state()
    out = []
    for event in events:
        chunks, state = codec.decode_stream_event(event, state)
        out.extend(chunks)
    return out


def test_stream_text_reasoning_and_finish(codec):
    out = _decode_all(
        codec,
        [
            _delta({"role": "assistant", "content": ""}),
            _delta({"reasoning_content": "thinking..."}),
            _delta({"content": "Hel"}),
            _delta({"content": "lo"}),
            _delta({}, finish_reason="stop"),
            _sse({"id": "chatcmpl-1", "choices": [], "usage": {"prompt_tokens": 3, "completion_tokens": 2}}),
            _sse("[DONE]"),
        ],
    )
    assert [c.type for c in out] == ["meta", "thinking", "content", "content", "meta", "meta"]  # nosec B101
    assert out[0].metadata == {"response_id": "chatcmpl-1", "model": "gpt-4o-mini"}  # nosec B101
    assert out[1].text == "thinking..."  # nosec B101
    assert out[4].metadata == {"finish_reason": "stop"}  # nosec B101
    assert out[5].metadata == {"usage": {"prompt_tokens": 3, "completion_tokens": 2}}  # nosec B101


def test_stream_incremental_tool_arguments(codec):
    first = {"index": 0, "id": "call_1", "type": "function", "function": {"name": "get_weather", "arguments": ""}}
    out = _decode_all(
        codec,
        [
            _delta({"tool_calls": [first]}),
            _delta({"tool_calls": [{"index": 0, "function": {"arguments": '{"city": '}}]}),
            _delta({"tool_calls": [{"index": 0, "function": {"arguments": '"Paris"}'}}]}),
            _delta({}, finish_reason="tool_calls", usage={"prompt_tokens": 9, "completion_tokens": 4}),
        ],
    )
    calls = [c for c in out if c.type == "tool_call"]
    assert [c.arguments for c in calls] == [{}, {}, {"city": "Paris"}]  # nosec B101
    assert all(c.name == "get_weather" and c.call_id == "call_1" for c in calls)  # nosec B101
    assert out[-1].metadata == {  # nosec B101
        "finish_reason": "tool_calls",
        "usage": {"prompt_tokens": 9, "completion_tokens": 4},
    }


def test_stream_error_payload_raises(codec):
    state = codec.new_stream_state()
    with pytest.raises(APIResponseError) as excinfo:
        codec.decode_stream_event(_sse({"error": {"message": "overloaded"}}), state)
    assert excinfo.value.message == "OpenAI stream error: overloaded"  # nosec B101


def test_stream_through_normalizer_and_join(codec):
    events = [
        _delta({"content": "Hi"}, id="chatcmpl-9", model="gpt-4o-mini-2024-07-18"),
        _delta({"content": " there"}, id="chatcmpl-9"),
        _delta({}, finish_reason="stop", id="chatcmpl-9"),
        _sse("[DONE]"),
    ]
    resp = Response(id="", model="gpt-4o-mini", streaming=True, stream=iter_canonical_chunks(events, codec))
    joined = join_stream(resp).unwrap()
    assert joined.message.content == [TextPart("Hi there")]  # nosec B101
    assert joined.finish_reason == "stop"  # nosec B101
    assert joined.id == "chatcmpl-9"  # nosec B101
    assert joined.model == "gpt-4o-mini-2024-07-18"  # nosec B101
    assert joined.provider_meta == {}  # nosec B101


def test_malformed_frame_surfaces_as_stream_error(codec):
    it = iter_canonical_chunks([_delta({"content": "ok"}), _sse("{not json")], codec)
    assert [next(it).type, next(it).text] == ["meta", "ok"]  # nosec B101
    with pytest.raises(APIStreamError):
        next(it)


# --------------------------------------------------------------- embeddings


def test_encode_embedding_request(codec):
    model = Model.from_spec("openai:text-embedding-3-small")
    opts = RequestOptions.parse({"dimensions": 256})
    req = codec.encode_embedding_request(["a", "b"], model, opts, "k")
    assert req.url == "https://api.openai.com/v1/embeddings"  # nosec B101
    assert req.body == {"model": "text-embedding-3-small", "input": ["a", "b"], "dimensions": 256}  # nosec B101


def test_encode_embedding_rejects_empty_input(codec):
    model = Model.from_spec("openai:text-embedding-3-small")
    with pytest.raises(InvalidParameter):
        codec.encode_embedding_request([], model, RequestOptions.parse({}), "k")


def test_decode_embeddings_orders_by_index(codec):
    body = {"data": [{"index": 1, "embedding": [0.3, 0.4]}, {"index": 0, "embedding": [0.1, 0.2]}]}
    assert codec.decode_embeddings(body) == [[0.1, 0.2], [0.3, 0.4]]  # nosec B101
    with pytest.raises(ValueError):
        codec.decode_embeddings({"object": "list"})
