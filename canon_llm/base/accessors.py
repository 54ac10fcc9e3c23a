"""Canonical response accessors.

Pure, null-safe projections over :class:`Response`. None of them raise for
a response that has no message or no stream; they return the documented
empty value instead. ``text_stream`` and ``object_stream`` consume the
response's live stream.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from .constants import STRUCTURED_OUTPUT_TOOL
from .models import Response, TextPart, ToolCall, ToolCallPart
from .streaming.chunks import ContentChunk, ToolCallChunk


def text(response: Response) -> Optional[str]:
    """Concatenate the message's text parts in order; ``None`` without a message."""
    if response.message is None:
        return None
    return "".join(p.text for p in response.message.content if isinstance(p, TextPart))


def tool_calls(response: Response) -> List[ToolCall]:
    """Tool calls of the message.

    Falls back to the message's ``tool_call`` content parts when
    ``message.tool_calls`` is not set.
    """
    message = response.message
    if message is None:
        return []
    if message.tool_calls is not None:
        return list(message.tool_calls)
    return [
        ToolCall(name=p.tool_name, arguments=p.input, id=p.tool_call_id)
        for p in message.content
        if isinstance(p, ToolCallPart)
    ]


def usage(response: Response) -> Optional[Dict[str, Any]]:
    return response.usage


def finish_reason(response: Response) -> Optional[str]:
    return response.finish_reason


def object(response: Response) -> Optional[Any]:  # noqa: A001 - mirrors Response.object
    return response.object


def _live_stream(response: Response):
    if not response.streaming or response.stream is None:
        return ()
    return response.stream


def text_stream(response: Response) -> Iterator[str]:
    """Lazily yield the text of each ``content`` chunk of the live stream."""
    for chunk in _live_stream(response):
        if isinstance(chunk, ContentChunk):
            yield chunk.text


def object_stream(response: Response) -> Iterator[Dict[str, Any]]:
    """Lazily yield the (partial) arguments of each structured-output tool call chunk."""
    for chunk in _live_stream(response):
        if isinstance(chunk, ToolCallChunk) and chunk.name == STRUCTURED_OUTPUT_TOOL:
            yield chunk.arguments


__all__ = [
    "text",
    "tool_calls",
    "usage",
    "finish_reason",
    "object",
    "text_stream",
    "object_stream",
]
