"""Accumulates streamed tool-call argument fragments.

Vendors send tool-call arguments as JSON text split across many events,
addressed by a per-response slot (OpenAI ``index``, Anthropic content block
``index``). The accumulator concatenates the fragments per slot and, after
each increment, produces a ``tool_call`` chunk carrying the best-effort
arguments map parsed so far.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..utils.json_repair import parse_partial_json
from .chunks import ToolCallChunk, tool_call


@dataclass
class _PendingCall:
    id: Optional[str] = None
    name: Optional[str] = None
    buffer: str = ""


@dataclass
class ToolCallAccumulator:
    """Per-response tool call buffers keyed by vendor slot."""

    calls: Dict[Any, _PendingCall] = field(default_factory=dict)

    def start(self, slot: Any, *, call_id: Optional[str] = None, name: Optional[str] = None) -> ToolCallChunk:
        """Open (or refresh) a slot and return its current state as a chunk."""
        pending = self.calls.setdefault(slot, _PendingCall())
        if call_id:
            pending.id = call_id
        if name:
            pending.name = name
        return self._chunk(slot, pending)

    def append(
        self,
        slot: Any,
        fragment: Optional[str],
        *,
        call_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> ToolCallChunk:
        """Add an argument fragment to ``slot`` and return the updated state."""
        pending = self.calls.setdefault(slot, _PendingCall())
        if call_id:
            pending.id = call_id
        if name:
            pending.name = name
        if fragment:
            pending.buffer += fragment
        return self._chunk(slot, pending)

    @staticmethod
    def _chunk(slot: Any, pending: _PendingCall) -> ToolCallChunk:
        args = parse_partial_json(pending.buffer) if pending.buffer else {}
        metadata: Dict[str, Any] = {"index": slot}
        if pending.id:
            metadata["id"] = pending.id
        return tool_call(pending.name, args, metadata)


__all__ = ["ToolCallAccumulator"]
