"""Anthropic streaming decode.

Event sequence of one Messages stream::

    message_start
    (content_block_start, content_block_delta*, content_block_stop)*
    message_delta
    message_stop

interleaved with ``ping``. Decoding rules:

- ``message_start``: remember the input usage; emits a meta chunk with the
  vendor ``response_id`` and ``model``
- ``content_block_start`` of a ``tool_use`` block: opens the tool slot and
  emits its initial tool_call chunk (empty arguments)
- ``text_delta`` / ``thinking_delta``: content / thinking chunk
- ``input_json_delta``: argument fragment for the block's slot; emits the
  accumulated tool_call chunk
- ``message_delta``: meta chunk with the normalized ``finish_reason`` and
  usage merged over the ``message_start`` usage
- ``error``: raises, ending the stream
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.errors import APIResponseError, ErrorCode
from ..base.streaming import chunks as chunk
from ..base.streaming.chunks import StreamChunk
from ..base.streaming.tool_call_accumulator import ToolCallAccumulator
from ..base.utils.wire_body import drop_none
from ..base.wire import StreamEvent
from .helpers import ERROR_TYPE_MAP, merge_usage, normalize_stop_reason


@dataclass
class AnthropicStreamState:
    """Per-response decode state."""

    tool_calls: ToolCallAccumulator = field(default_factory=ToolCallAccumulator)
    block_types: Dict[int, str] = field(default_factory=dict)
    message_id: Optional[str] = None
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None


def _stream_error(payload: Mapping[str, Any]) -> APIResponseError:
    err = payload.get("error") if isinstance(payload.get("error"), Mapping) else {}
    code = ERROR_TYPE_MAP.get(str(err.get("type")), ErrorCode.UNKNOWN)
    return APIResponseError(
        code=code,
        message=f"Anthropic stream error: {err.get('message') or err.get('type') or 'unknown'}",
        provider="anthropic",
        retryable=code in (ErrorCode.RATE_LIMIT, ErrorCode.UNAVAILABLE),
        body=dict(payload),
    )


def _on_block_start(payload: Mapping[str, Any], state: AnthropicStreamState) -> List[StreamChunk]:
    index = payload.get("index", 0)
    block = payload.get("content_block") or {}
    kind = block.get("type")
    state.block_types[index] = kind
    if kind == "tool_use":
        return [state.tool_calls.start(index, call_id=block.get("id"), name=block.get("name"))]
    if kind == "text" and block.get("text"):
        return [chunk.text(block["text"])]
    if kind == "thinking" and block.get("thinking"):
        return [chunk.thinking(block["thinking"])]
    return []


def _on_block_delta(payload: Mapping[str, Any], state: AnthropicStreamState) -> List[StreamChunk]:
    index = payload.get("index", 0)
    delta = payload.get("delta") or {}
    kind = delta.get("type")
    if kind == "text_delta":
        return [chunk.text(delta.get("text", ""))]
    if kind == "thinking_delta":
        return [chunk.thinking(delta.get("thinking", ""))]
    if kind == "input_json_delta":
        return [state.tool_calls.append(index, delta.get("partial_json"))]
    return []


def _on_message_delta(payload: Mapping[str, Any], state: AnthropicStreamState) -> List[StreamChunk]:
    delta = payload.get("delta") or {}
    data: Dict[str, Any] = {}
    stop_reason = normalize_stop_reason(delta.get("stop_reason"))
    if stop_reason is not None:
        data["finish_reason"] = stop_reason
    if delta.get("stop_sequence"):
        data["stop_sequence"] = delta["stop_sequence"]
    usage = merge_usage(state.usage, payload.get("usage"))
    if usage is not None:
        state.usage = usage
        data["usage"] = usage
    return [chunk.meta(data)] if data else []


def decode_anthropic_event(event: StreamEvent, state: AnthropicStreamState) -> Tuple[List[StreamChunk], AnthropicStreamState]:
    if not event.data.strip():
        return [], state
    payload = event.json()
    if not isinstance(payload, Mapping):
        raise ValueError(f"unexpected Anthropic stream payload: {event.data[:200]}")
    kind = payload.get("type") or event.event

    if kind == "message_start":
        message = payload.get("message")
        if not isinstance(message, Mapping):
            message = {}
        state.message_id = message.get("id")
        state.model = message.get("model")
        usage = message.get("usage")
        state.usage = dict(usage) if isinstance(usage, Mapping) else None
        identity = drop_none({"response_id": state.message_id, "model": state.model})
        return ([chunk.meta(identity)] if identity else []), state
    if kind == "content_block_start":
        return _on_block_start(payload, state), state
    if kind == "content_block_delta":
        return _on_block_delta(payload, state), state
    if kind == "message_delta":
        return _on_message_delta(payload, state), state
    if kind == "error":
        raise _stream_error(payload)
    # ping, content_block_stop, message_stop and unknown future events
    return [], state


__all__ = ["AnthropicStreamState", "decode_anthropic_event"]
