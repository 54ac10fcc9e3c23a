"""OpenAI Chat Completions message encoding.

System messages stay inline in ``messages``. A message holding exactly one
text part is sent as a plain string; richer content becomes the array form.
Assistant tool calls move to ``tool_calls`` with JSON-string arguments, and
every tool result becomes its own ``role: "tool"`` message.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ..base.models import (
    Context,
    FilePart,
    ImagePart,
    ImageUrlPart,
    Message,
    TextPart,
    ToolCall,
    ToolCallPart,
    ToolResultPart,
)


def _serialize_output(output: Any) -> str:
    return output if isinstance(output, str) else json.dumps(output, ensure_ascii=False)


def _encode_part(part: Any) -> Optional[Dict[str, Any]]:
    if isinstance(part, TextPart):
        return {"type": "text", "text": part.text}
    if isinstance(part, ImagePart):
        return {"type": "image_url", "image_url": {"url": f"data:{part.media_type};base64,{part.base64_data()}"}}
    if isinstance(part, ImageUrlPart):
        return {"type": "image_url", "image_url": {"url": part.url}}
    if isinstance(part, FilePart):
        file_block: Dict[str, Any] = {"file_data": f"data:{part.media_type};base64,{part.base64_data()}"}
        if part.filename:
            file_block["filename"] = part.filename
        return {"type": "file", "file": file_block}
    return None


def _encode_content(parts: List[Any]) -> Any:
    blocks = [b for b in (_encode_part(p) for p in parts) if b is not None]
    if not blocks:
        return ""
    if len(blocks) == 1 and blocks[0]["type"] == "text":
        return blocks[0]["text"]
    return blocks


def _encode_tool_call(call: ToolCall) -> Dict[str, Any]:
    return {
        "id": call.id,
        "type": "function",
        "function": {"name": call.name, "arguments": json.dumps(call.arguments or {}, ensure_ascii=False)},
    }


def _assistant_tool_calls(message: Message) -> List[ToolCall]:
    if message.tool_calls:
        return list(message.tool_calls)
    return [
        ToolCall(name=p.tool_name, arguments=p.input, id=p.tool_call_id)
        for p in message.content
        if isinstance(p, ToolCallPart)
    ]


def encode_message(message: Message) -> List[Dict[str, Any]]:
    """Encode one canonical message; tool messages may expand to several."""
    if message.role == "tool":
        return [
            {"role": "tool", "tool_call_id": p.tool_call_id, "content": _serialize_output(p.output)}
            for p in message.content
            if isinstance(p, ToolResultPart)
        ]
    encoded: Dict[str, Any] = {"role": message.role, "content": _encode_content(message.content)}
    if message.role == "assistant":
        calls = _assistant_tool_calls(message)
        if calls:
            encoded["tool_calls"] = [_encode_tool_call(c) for c in calls]
            if encoded["content"] == "":
                encoded["content"] = None
    return [encoded]


def encode_messages(context: Context) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for message in context.messages:
        out.extend(encode_message(message))
    return out


__all__ = ["encode_message", "encode_messages"]
