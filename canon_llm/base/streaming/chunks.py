"""Canonical stream chunk kinds.

Every codec's stream decoder emits these four kinds and nothing else:

- ``ContentChunk``: a piece of visible assistant text.
- ``ThinkingChunk``: a piece of reasoning text (never folded into content).
- ``ToolCallChunk``: the accumulated, possibly partial, arguments of one
  tool call so far. Later chunks for the same call supersede earlier ones.
- ``MetaChunk``: out-of-band data such as ``finish_reason`` and ``usage``.

The module-level constructors are the supported way to build chunks;
:func:`validate` is pure and total and never raises.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from ..errors import ChunkValidationError
from ..result import Failure, Success


@dataclass(frozen=True)
class ContentChunk:
    text: Optional[str]
    metadata: Dict[str, Any] = field(default_factory=dict)
    type: ClassVar[str] = "content"


@dataclass(frozen=True)
class ThinkingChunk:
    text: Optional[str]
    metadata: Dict[str, Any] = field(default_factory=dict)
    type: ClassVar[str] = "thinking"


@dataclass(frozen=True)
class ToolCallChunk:
    """Tool call state; ``metadata`` carries ``id`` and ``index`` when known."""

    name: Optional[str]
    arguments: Optional[Dict[str, Any]]
    metadata: Dict[str, Any] = field(default_factory=dict)
    type: ClassVar[str] = "tool_call"

    @property
    def call_id(self) -> Optional[str]:
        value = self.metadata.get("id")
        return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class MetaChunk:
    metadata: Dict[str, Any] = field(default_factory=dict)
    type: ClassVar[str] = "meta"


StreamChunk = Union[ContentChunk, ThinkingChunk, ToolCallChunk, MetaChunk]


def text(value: Optional[str], metadata: Optional[Mapping[str, Any]] = None) -> ContentChunk:
    return ContentChunk(text=value, metadata=dict(metadata or {}))


def thinking(value: Optional[str], metadata: Optional[Mapping[str, Any]] = None) -> ThinkingChunk:
    return ThinkingChunk(text=value, metadata=dict(metadata or {}))


def tool_call(
    name: Optional[str],
    arguments: Optional[Mapping[str, Any]],
    metadata: Optional[Mapping[str, Any]] = None,
) -> ToolCallChunk:
    args = dict(arguments) if isinstance(arguments, Mapping) else arguments
    return ToolCallChunk(name=name, arguments=args, metadata=dict(metadata or {}))


def meta(data: Mapping[str, Any], extra_metadata: Optional[Mapping[str, Any]] = None) -> MetaChunk:
    """Build a meta chunk; ``extra_metadata`` is merged over ``data``."""
    merged = dict(data)
    if extra_metadata:
        merged.update(extra_metadata)
    return MetaChunk(metadata=merged)


def validate(chunk: Any) -> "Success[StreamChunk] | Failure[ChunkValidationError]":
    """Check the per-kind required fields of ``chunk``.

    Returns ``Success(chunk)`` or ``Failure(ChunkValidationError)``.
    """
    if isinstance(chunk, ContentChunk):
        if isinstance(chunk.text, str):
            return Success(chunk)
        return Failure(ChunkValidationError(reason="Content chunks must have non-nil text"))
    if isinstance(chunk, ThinkingChunk):
        if isinstance(chunk.text, str):
            return Success(chunk)
        return Failure(ChunkValidationError(reason="Thinking chunks must have non-nil text"))
    if isinstance(chunk, ToolCallChunk):
        if chunk.name is not None and isinstance(chunk.arguments, dict):
            return Success(chunk)
        return Failure(ChunkValidationError(reason="Tool call chunks must have non-nil name and arguments"))
    if isinstance(chunk, MetaChunk):
        if isinstance(chunk.metadata, dict) and chunk.metadata:
            return Success(chunk)
        return Failure(ChunkValidationError(reason="Meta chunks must have a non-empty metadata map"))
    kind = getattr(chunk, "type", None) or type(chunk).__name__
    return Failure(ChunkValidationError(reason=f"Unknown chunk type: {kind}"))


__all__ = [
    "ContentChunk",
    "ThinkingChunk",
    "ToolCallChunk",
    "MetaChunk",
    "StreamChunk",
    "text",
    "thinking",
    "tool_call",
    "meta",
    "validate",
]
