"""Streaming package.

Exposes the canonical chunk kinds, the normalizer that produces them from
vendor events, and the materializer that folds them into a response.
"""

from . import chunks
from .chunks import (
    ContentChunk,
    MetaChunk,
    StreamChunk,
    ThinkingChunk,
    ToolCallChunk,
    validate,
)
from .chunk_stream import ChunkStream
from .tool_call_accumulator import ToolCallAccumulator
from .streaming_metrics import StreamMetrics
from .streaming_finalize import finalize_stream
from .normalizer import iter_canonical_chunks, normalize_stream
from .materializer import join_stream

__all__ = [
    "chunks",
    "ContentChunk",
    "MetaChunk",
    "StreamChunk",
    "ThinkingChunk",
    "ToolCallChunk",
    "validate",
    "ChunkStream",
    "ToolCallAccumulator",
    "StreamMetrics",
    "finalize_stream",
    "iter_canonical_chunks",
    "normalize_stream",
    "join_stream",
]
