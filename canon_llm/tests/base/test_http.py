import httpx
import pytest

from canon_llm.base.errors import APIResponseError, ErrorCode, ProviderError
from canon_llm.base.http.sse import iter_sse_events
from canon_llm.base.http.transport import HttpxTransport
from canon_llm.base.timeouts import TimeoutConfig, get_timeout_config
from canon_llm.base.wire import StreamEvent, WireRequest


def test_sse_framing():
    lines = [
        ": keep-alive",
        "event: message_start",
        'data: {"type": "message_start"}',
        "",
        "data: line one",
        "data: line two",
        "",
        "",
        "data: [DONE]",
    ]
    assert list(iter_sse_events(lines)) == [  # nosec B101
        StreamEvent(event="message_start", data='{"type": "message_start"}'),
        StreamEvent(event=None, data="line one\nline two"),
        StreamEvent(event=None, data="[DONE]"),
    ]


def test_stream_event_json():
    assert StreamEvent(event=None, data='{"a": 1}').json() == {"a": 1}  # nosec B101
    with pytest.raises(ValueError):
        StreamEvent(event=None, data="not json").json()


def test_timeout_config_defaults_and_env(monkeypatch):
    monkeypatch.delenv("CANON_LLM_HTTP_TIMEOUT_SECONDS", raising=False)
    assert get_timeout_config().http_timeout_seconds == 60.0  # nosec B101
    monkeypatch.setenv("CANON_LLM_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("CANON_LLM_STREAM_TIMEOUT_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 5.0  # nosec B101
    assert cfg.stream_timeout_seconds == 120.0  # nosec B101


def test_timeout_for_request():
    cfg = TimeoutConfig(connect_timeout_seconds=1.0, http_timeout_seconds=2.0, stream_timeout_seconds=3.0)
    assert cfg.for_request(stream=False).read == 2.0  # nosec B101
    assert cfg.for_request(stream=True).read == 3.0  # nosec B101
    assert cfg.for_request(stream=True).connect == 1.0  # nosec B101


def _transport(handler):
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


def _request(stream=False):
    return WireRequest(method="POST", url="https://api.example/v1/chat", headers={"x-api-key": "k"}, body={"a": 1}, stream=stream)


def test_execute_returns_status_and_parsed_body_for_any_status():
    seen = {}

    def handler(request):
        seen["body"] = request.content
        seen["key"] = request.headers["x-api-key"]
        return httpx.Response(429, json={"error": {"message": "slow down"}})

    wire = _transport(handler).execute(_request())
    assert wire.status == 429  # nosec B101
    assert wire.body == {"error": {"message": "slow down"}}  # nosec B101
    assert seen["key"] == "k"  # nosec B101
    assert b'"a"' in seen["body"]  # nosec B101


def test_execute_translates_connection_errors():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ProviderError) as excinfo:
        _transport(handler).execute(_request())
    assert excinfo.value.code is ErrorCode.TRANSIENT  # nosec B101


def test_stream_yields_sse_frames():
    body = b'data: {"n": 1}\n\ndata: {"n": 2}\n\ndata: [DONE]\n\n'

    def handler(request):
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    events = list(_transport(handler).stream(_request(stream=True)))
    assert [e.data for e in events] == ['{"n": 1}', '{"n": 2}', "[DONE]"]  # nosec B101


def test_stream_error_status_raises_api_response_error():
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    with pytest.raises(APIResponseError) as excinfo:
        list(_transport(handler).stream(_request(stream=True)))
    assert excinfo.value.code is ErrorCode.AUTH  # nosec B101
    assert excinfo.value.status == 401  # nosec B101
