"""Anthropic response helpers: stop reasons, usage and content blocks."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..base.errors import ErrorCode
from ..base.models import TextPart, ToolCall

STOP_REASON_MAP: Dict[str, str] = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
    "tool_use": "tool_calls",
    "pause_turn": "stop",
    "refusal": "content_filter",
}

ERROR_TYPE_MAP: Dict[str, ErrorCode] = {
    "invalid_request_error": ErrorCode.VALIDATION,
    "authentication_error": ErrorCode.AUTH,
    "permission_error": ErrorCode.AUTH,
    "not_found_error": ErrorCode.NOT_FOUND,
    "request_too_large": ErrorCode.VALIDATION,
    "rate_limit_error": ErrorCode.RATE_LIMIT,
    "api_error": ErrorCode.SERVER_ERROR,
    "overloaded_error": ErrorCode.UNAVAILABLE,
}


def normalize_stop_reason(reason: Optional[str]) -> Optional[str]:
    if reason is None:
        return None
    return STOP_REASON_MAP.get(reason, reason)


def merge_usage(base: Optional[Mapping[str, Any]], update: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Overlay ``update`` on ``base``; ``message_delta`` usage only carries output tokens."""
    if base is None and update is None:
        return None
    merged: Dict[str, Any] = dict(base or {})
    merged.update({k: v for k, v in (update or {}).items() if v is not None})
    return merged


def decode_content_blocks(blocks: Any) -> Tuple[List[TextPart], List[ToolCall], List[str]]:
    """Split response content blocks into text parts, tool calls and thinking text.

    Adjacent text blocks stay separate parts, mirroring the vendor layout.
    """
    parts: List[TextPart] = []
    calls: List[ToolCall] = []
    thinking: List[str] = []
    for block in blocks or []:
        if not isinstance(block, Mapping):
            continue
        kind = block.get("type")
        if kind == "text":
            parts.append(TextPart(str(block.get("text") or "")))
        elif kind == "tool_use":
            args = block.get("input")
            calls.append(ToolCall(name=block.get("name"), arguments=dict(args) if isinstance(args, Mapping) else {}, id=block.get("id")))
        elif kind == "thinking":
            thinking.append(str(block.get("thinking") or ""))
    return parts, calls, thinking


__all__ = [
    "STOP_REASON_MAP",
    "ERROR_TYPE_MAP",
    "normalize_stop_reason",
    "merge_usage",
    "decode_content_blocks",
]
