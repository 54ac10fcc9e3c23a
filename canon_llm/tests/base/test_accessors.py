from canon_llm.base import accessors
from canon_llm.base.constants import STRUCTURED_OUTPUT_TOOL
from canon_llm.base.models import Message, Response, TextPart, ToolCall, ToolCallPart
from canon_llm.base.streaming import ChunkStream, chunks


def _realized(content, tool_calls=None, **fields):
    return Response(
        id="r",
        model="m",
        message=Message(role="assistant", content=content, tool_calls=tool_calls),
        **fields,
    )


def test_text_concatenates_text_parts_in_order():
    resp = _realized([TextPart("Hel"), ToolCallPart("f", {}, "c1"), TextPart("lo")])
    assert accessors.text(resp) == "Hello"  # nosec B101


def test_text_without_message_is_none():
    assert accessors.text(Response(id="r", model="m")) is None  # nosec B101


def test_tool_calls_prefers_message_tool_calls():
    call = ToolCall(name="f", arguments={"a": 1}, id="c1")
    resp = _realized([ToolCallPart("ignored", {}, "c0")], tool_calls=[call])
    assert accessors.tool_calls(resp) == [call]  # nosec B101


def test_tool_calls_falls_back_to_content_parts():
    resp = _realized([TextPart("x"), ToolCallPart("lookup", {"q": 1}), ToolCallPart(None, None, "c2")])
    calls = accessors.tool_calls(resp)
    assert calls[0] == ToolCall(name="lookup", arguments={"q": 1}, id=None)  # nosec B101
    assert calls[1] == ToolCall(name=None, arguments=None, id="c2")  # nosec B101


def test_tool_calls_without_message_is_empty():
    assert accessors.tool_calls(Response(id="r", model="m")) == []  # nosec B101


def test_scalar_accessors_read_fields():
    resp = _realized([TextPart("")], usage={"input_tokens": 3}, finish_reason="stop", object={"k": "v"})
    assert accessors.usage(resp) == {"input_tokens": 3}  # nosec B101
    assert accessors.finish_reason(resp) == "stop"  # nosec B101
    assert accessors.object(resp) == {"k": "v"}  # nosec B101


def test_text_stream_yields_only_content_lazily():
    pulled = []

    def source():
        for c in (chunks.thinking("t"), chunks.text("a"), chunks.meta({"x": 1}), chunks.text("b")):
            pulled.append(c)
            yield c

    resp = Response(id="r", model="m", streaming=True, stream=ChunkStream(source()))
    it = accessors.text_stream(resp)
    assert pulled == []  # nosec B101
    assert next(it) == "a"  # nosec B101
    assert list(it) == ["b"]  # nosec B101


def test_object_stream_yields_structured_arguments():
    stream = ChunkStream(
        iter(
            [
                chunks.tool_call(STRUCTURED_OUTPUT_TOOL, {}, {"id": "s"}),
                chunks.tool_call("other", {"z": 0}, {"id": "o"}),
                chunks.tool_call(STRUCTURED_OUTPUT_TOOL, {"name": "A"}, {"id": "s"}),
            ]
        )
    )
    resp = Response(id="r", model="m", streaming=True, stream=stream)
    assert list(accessors.object_stream(resp)) == [{}, {"name": "A"}]  # nosec B101


def test_stream_accessors_on_realized_response_are_empty():
    resp = _realized([TextPart("done")])
    assert list(accessors.text_stream(resp)) == []  # nosec B101
    assert list(accessors.object_stream(resp)) == []  # nosec B101
