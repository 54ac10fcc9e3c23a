import pytest

from canon_llm.base.errors import APIStreamError, ErrorCode
from canon_llm.base.streaming import ChunkStream, chunks, iter_canonical_chunks, normalize_stream
from canon_llm.base.wire import StreamEvent


class EchoCodec:
    """Decodes ``data`` as text; ``"!boom"`` fails; state counts events."""

    provider_name = "echo"

    def __init__(self):
        self.states = []

    def new_stream_state(self):
        state = {"seen": 0}
        self.states.append(state)
        return state

    def decode_stream_event(self, event, state):
        state["seen"] += 1
        if event.data == "!boom":
            raise ValueError("cannot decode")
        if event.data == "!end":
            return [chunks.meta({"finish_reason": "stop", "usage": {"prompt_tokens": 2, "completion_tokens": 3}})], state
        if event.data == "":
            return [], state
        return [chunks.text(event.data)], state


def _events(*payloads):
    return [StreamEvent(event=None, data=p) for p in payloads]


def test_chunks_come_out_in_input_order():
    out = list(iter_canonical_chunks(_events("a", "", "b", "!end"), EchoCodec()))
    assert [c.type for c in out] == ["content", "content", "meta"]  # nosec B101
    assert [c.text for c in out[:2]] == ["a", "b"]  # nosec B101


def test_nothing_is_pulled_before_iteration():
    pulled = []

    def source():
        for e in _events("a", "b"):
            pulled.append(e)
            yield e

    it = iter_canonical_chunks(source(), EchoCodec())
    assert pulled == []  # nosec B101
    assert next(it).text == "a"  # nosec B101
    assert len(pulled) == 1  # nosec B101


def test_decode_fault_after_earlier_chunks_raises_stream_error():
    it = iter_canonical_chunks(_events("a", "!boom", "c"), EchoCodec())
    assert next(it).text == "a"  # nosec B101
    with pytest.raises(APIStreamError) as excinfo:
        next(it)
    assert isinstance(excinfo.value.cause, ValueError)  # nosec B101
    assert excinfo.value.code is ErrorCode.STREAM  # nosec B101
    assert excinfo.value.provider == "echo"  # nosec B101


def test_transport_fault_is_wrapped():
    def source():
        yield StreamEvent(event=None, data="a")
        raise ConnectionResetError("peer went away")

    it = iter_canonical_chunks(source(), EchoCodec())
    next(it)
    with pytest.raises(APIStreamError) as excinfo:
        next(it)
    assert isinstance(excinfo.value.cause, ConnectionResetError)  # nosec B101


def test_each_run_gets_fresh_decode_state():
    codec = EchoCodec()
    list(iter_canonical_chunks(_events("a", "b"), codec))
    list(iter_canonical_chunks(_events("c"), codec))
    assert [s["seen"] for s in codec.states] == [2, 1]  # nosec B101


def test_early_stop_closes_the_source():
    closed = []

    def source():
        try:
            for e in _events("a", "b", "c"):
                yield e
        finally:
            closed.append(True)

    it = iter_canonical_chunks(source(), EchoCodec())
    next(it)
    it.close()
    assert closed == [True]  # nosec B101


def test_normalize_stream_is_single_pass():
    stream = normalize_stream(_events("a"), EchoCodec(), model="m")
    assert isinstance(stream, ChunkStream)  # nosec B101
    assert [c.text for c in stream] == ["a"]  # nosec B101
    assert stream.consumed  # nosec B101
    with pytest.raises(APIStreamError):
        iter(stream)


def test_stream_end_event_is_logged(log_capture):
    list(iter_canonical_chunks(_events("a", "!end"), EchoCodec(), model="m"))
    events = {e["event"]: e for e in log_capture.events()}
    assert "stream.start" in events  # nosec B101
    end = events["stream.end"]
    assert end["provider"] == "echo"  # nosec B101
    assert end["emitted"] is True  # nosec B101
    assert end["emitted_count"] == 2  # nosec B101
    assert end["tokens"] == {"prompt": 2, "completion": 3, "total": 5}  # nosec B101
    assert "error_code" not in end  # nosec B101


def test_stream_error_event_carries_error_code(log_capture):
    with pytest.raises(APIStreamError):
        list(iter_canonical_chunks(_events("!boom"), EchoCodec()))
    errors = [e for e in log_capture.events() if e["event"] == "stream.error"]
    assert len(errors) == 1  # nosec B101
    assert errors[0]["error_code"] == "stream"  # nosec B101
    assert errors[0]["emitted"] is False  # nosec B101
