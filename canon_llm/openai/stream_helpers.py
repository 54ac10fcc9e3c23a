"""OpenAI streaming decode.

Each SSE frame carries one ``chat.completion.chunk`` JSON document (or the
``[DONE]`` sentinel). Decoding rules:

- ``delta.content`` -> content chunk
- ``delta.reasoning_content`` / ``delta.reasoning`` -> thinking chunk
- ``delta.tool_calls[i]`` -> argument fragment for slot ``index``; a
  tool_call chunk with the accumulated arguments is emitted per fragment
- ``finish_reason`` -> meta chunk (with ``usage`` when the same frame has it)
- a frame with ``usage`` and no choices -> meta chunk with ``usage`` only
- the first frame carrying an ``id`` -> meta chunk with ``response_id`` and
  ``model``
- ``{"error": ...}`` -> raises, ending the stream
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.errors import translate_http_error
from ..base.streaming import chunks as chunk
from ..base.streaming.chunks import StreamChunk
from ..base.streaming.tool_call_accumulator import ToolCallAccumulator
from ..base.utils.wire_body import drop_none
from ..base.wire import StreamEvent
from .helpers import reasoning_text

DONE_SENTINEL = "[DONE]"


@dataclass
class OpenAIStreamState:
    """Per-response decode state."""

    tool_calls: ToolCallAccumulator = field(default_factory=ToolCallAccumulator)
    response_id: Optional[str] = None
    model: Optional[str] = None
    done: bool = False


def _tool_call_chunks(delta: Mapping[str, Any], state: OpenAIStreamState) -> List[StreamChunk]:
    out: List[StreamChunk] = []
    for position, item in enumerate(delta.get("tool_calls") or []):
        if not isinstance(item, Mapping):
            continue
        slot = item.get("index", position)
        fn = item.get("function")
        if not isinstance(fn, Mapping):
            fn = {}
        out.append(
            state.tool_calls.append(
                slot,
                fn.get("arguments"),
                call_id=item.get("id"),
                name=fn.get("name"),
            )
        )
    return out


def decode_openai_event(event: StreamEvent, state: OpenAIStreamState) -> Tuple[List[StreamChunk], OpenAIStreamState]:
    data = event.data.strip()
    if not data:
        return [], state
    if data == DONE_SENTINEL:
        state.done = True
        return [], state
    payload = event.json()
    if not isinstance(payload, Mapping):
        raise ValueError(f"unexpected OpenAI stream payload: {data[:200]}")
    if "error" in payload:
        raise translate_http_error(None, payload, provider="openai", reason="OpenAI stream error")

    out: List[StreamChunk] = []
    if state.response_id is None and payload.get("id"):
        state.response_id = str(payload["id"])
        state.model = payload.get("model") or None
        out.append(chunk.meta(drop_none({"response_id": state.response_id, "model": state.model})))
    usage = payload.get("usage") if isinstance(payload.get("usage"), Mapping) else None

    finish_reason: Optional[str] = None
    for choice in payload.get("choices") or []:
        if not isinstance(choice, Mapping):
            continue
        delta = choice.get("delta")
        if not isinstance(delta, Mapping):
            delta = {}
        thought = reasoning_text(delta)
        if thought:
            out.append(chunk.thinking(thought))
        content = delta.get("content")
        if isinstance(content, str) and content:
            out.append(chunk.text(content))
        out.extend(_tool_call_chunks(delta, state))
        if choice.get("finish_reason"):
            finish_reason = choice["finish_reason"]

    if finish_reason is not None:
        data_out: Dict[str, Any] = {"finish_reason": finish_reason}
        if usage is not None:
            data_out["usage"] = dict(usage)
        out.append(chunk.meta(data_out))
    elif usage is not None:
        out.append(chunk.meta({"usage": dict(usage)}))
    return out, state


__all__ = ["DONE_SENTINEL", "OpenAIStreamState", "decode_openai_event"]
