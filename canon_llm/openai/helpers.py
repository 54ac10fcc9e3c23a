"""Decoding helpers for OpenAI Chat Completions bodies."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from ..base.models import ToolCall
from ..base.utils.json_repair import parse_partial_json


def parse_arguments(raw: Any) -> Dict[str, Any]:
    """Tool arguments arrive as a JSON string; tolerate dicts and bad JSON."""
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str) or not raw.strip():
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        return parse_partial_json(raw)
    return value if isinstance(value, dict) else {}


def decode_tool_calls(raw_calls: Any) -> List[ToolCall]:
    calls: List[ToolCall] = []
    for item in raw_calls or []:
        if not isinstance(item, Mapping):
            continue
        fn = item.get("function")
        if not isinstance(fn, Mapping):
            fn = {}
        calls.append(ToolCall(name=fn.get("name"), arguments=parse_arguments(fn.get("arguments")), id=item.get("id")))
    return calls


def first_choice(body: Mapping[str, Any]) -> Mapping[str, Any]:
    choices = body.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        return choices[0]
    return {}


def reasoning_text(message: Mapping[str, Any]) -> Optional[str]:
    """Reasoning text from OpenAI-compatible servers (``reasoning_content`` or ``reasoning``)."""
    for key in ("reasoning_content", "reasoning"):
        value = message.get(key)
        if isinstance(value, str) and value:
            return value
    return None


__all__ = ["parse_arguments", "decode_tool_calls", "first_choice", "reasoning_text"]
