"""Anthropic Messages API context encoding.

Differences from the OpenAI layout:

- system messages are lifted to the top-level ``system`` field; only the
  first one is used and later system messages are dropped;
- only ``user`` and ``assistant`` roles exist, so ``tool`` messages are sent
  as ``user``;
- content is a list of typed blocks (``text``, ``tool_use``,
  ``tool_result``, ``image``, ``document``); a list holding a single text
  block collapses to a plain string and an empty list to ``""``;
- ``tool_result`` content must be a string, so other outputs are JSON
  encoded;
- assistant tool calls held on ``Message.tool_calls`` (the decoded form)
  are replayed as ``tool_use`` blocks after the content.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from ..base.models import (
    Context,
    FilePart,
    ImagePart,
    ImageUrlPart,
    Message,
    Model,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)
from ..base.utils.wire_body import drop_none


def serialize_tool_output(output: Any) -> str:
    return output if isinstance(output, str) else json.dumps(output, ensure_ascii=False)


def encode_content_part(part: Any) -> Optional[Dict[str, Any]]:
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}
    if isinstance(part, ToolCallPart):
        return {"type": "tool_use", "id": part.tool_call_id, "name": part.tool_name, "input": part.input}
    if isinstance(part, ToolResultPart):
        return {
            "type": "tool_result",
            "tool_use_id": part.tool_call_id,
            "content": serialize_tool_output(part.output),
        }
    if isinstance(part, ImagePart):
        return {
            "type": "image",
            "source": {"type": "base64", "media_type": part.media_type, "data": part.base64_data()},
        }
    if isinstance(part, ImageUrlPart):
        return {"type": "image", "source": {"type": "url", "url": part.url}}
    if isinstance(part, FilePart):
        return {
            "type": "document",
            "source": {"type": "base64", "media_type": part.media_type, "data": part.base64_data()},
        }
    return None


def _collapse(blocks: List[Dict[str, Any]]) -> Union[str, List[Dict[str, Any]]]:
    if not blocks:
        return ""
    if len(blocks) == 1 and blocks[0]["type"] == "text":
        return blocks[0]["text"]
    return blocks


def encode_content(content: Union[str, List[Any]]) -> Union[str, List[Dict[str, Any]]]:
    if isinstance(content, str):
        return content
    return _collapse([b for b in (encode_content_part(p) for p in content) if b is not None])


def _tool_use_blocks(message: Message) -> List[Dict[str, Any]]:
    """``tool_use`` blocks for calls held on ``message.tool_calls`` and not already in the content."""
    if message.role != "assistant" or not message.tool_calls:
        return []
    if not isinstance(message.content, str) and any(isinstance(p, ToolCallPart) for p in message.content):
        return []
    return [
        {"type": "tool_use", "id": call.id, "name": call.name, "input": dict(call.arguments or {})}
        for call in message.tool_calls
    ]


def encode_message(message: Message) -> Dict[str, Any]:
    role = "user" if message.role == "tool" else message.role
    tool_uses = _tool_use_blocks(message)
    if not tool_uses:
        return {"role": role, "content": encode_content(message.content)}
    if isinstance(message.content, str):
        blocks = [{"type": "text", "text": message.content}] if message.content else []
    else:
        blocks = [b for b in (encode_content_part(p) for p in message.content) if b is not None]
    blocks = [b for b in blocks if not (b["type"] == "text" and not b["text"])]
    return {"role": role, "content": _collapse(blocks + tool_uses)}


def encode_context(context: Context, model: Model) -> Dict[str, Any]:
    """Encode ``context`` into the Messages API body fields (``None`` values dropped)."""
    system_messages = [m for m in context.messages if m.role == "system"]
    others = [m for m in context.messages if m.role != "system"]
    body: Dict[str, Any] = {
        "model": model.model,
        "system": encode_content(system_messages[0].content) if system_messages else None,
        "messages": [encode_message(m) for m in others],
        "tools": [t.to_anthropic_format() for t in context.tools] or None,
    }
    return drop_none(body)


__all__ = ["encode_context", "encode_content", "encode_content_part", "encode_message", "serialize_tool_output"]
