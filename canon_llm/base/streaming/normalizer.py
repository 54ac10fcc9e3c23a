"""Streaming normalizer.

Turns a vendor event sequence into canonical chunks by running each framed
event through the codec's per-event decoder. The result is a lazy generator:
nothing is read from the transport until the consumer pulls, chunks come out
in input order, and the whole run is single-pass.

Failure modes
-------------
- The codec raises while decoding an event, or the transport raises while
  the next event is pulled: the generator raises :class:`APIStreamError`
  wrapping the cause. Chunks yielded before the fault stay valid.
- The consumer stops early: the event iterator is closed, which lets the
  transport release its connection.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional

from ..errors import APIStreamError, ErrorCode
from ..logging import LogContext, get_logger, normalized_log_event
from ..wire import StreamEvent
from .chunk_stream import ChunkStream
from .chunks import ContentChunk, MetaChunk, StreamChunk, ThinkingChunk
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics

_logger = get_logger("canon_llm.streaming")


def _close_quietly(events: Any) -> None:
    close = getattr(events, "close", None)
    if callable(close):
        close()


def iter_canonical_chunks(
    events: Iterable[StreamEvent],
    codec: Any,
    *,
    model: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> Iterator[StreamChunk]:
    """Yield canonical chunks decoded from ``events`` by ``codec``.

    Decode state comes from ``codec.new_stream_state()`` and is private to
    this run.
    """
    log = logger or _logger
    ctx = LogContext(provider=getattr(codec, "provider_name", None), model=model, operation="stream")
    metrics = StreamMetrics()
    state = codec.new_stream_state()
    source = iter(events)
    normalized_log_event(log, "stream.start", ctx, phase="start", attempt=None, emitted=False, tokens=None)
    try:
        while True:
            try:
                event = next(source)
            except StopIteration:
                break
            except Exception as exc:
                raise APIStreamError(cause=exc, provider=ctx.provider, model=model) from exc
            metrics.events += 1
            try:
                chunks, state = codec.decode_stream_event(event, state)
            except Exception as exc:
                raise APIStreamError(cause=exc, provider=ctx.provider, model=model) from exc
            for chunk in chunks:
                if isinstance(chunk, (ContentChunk, ThinkingChunk)):
                    metrics.mark_token()
                elif isinstance(chunk, MetaChunk):
                    metrics.record_usage(chunk.metadata.get("usage"))
                metrics.emitted += 1
                yield chunk
    except APIStreamError as exc:
        finalize_stream(logger=log, ctx=ctx, metrics=metrics, error=exc.cause, error_code=ErrorCode.STREAM.value)
        raise
    except GeneratorExit:
        finalize_stream(logger=log, ctx=ctx, metrics=metrics)
        raise
    else:
        finalize_stream(logger=log, ctx=ctx, metrics=metrics)
    finally:
        _close_quietly(source)


def normalize_stream(
    events: Iterable[StreamEvent],
    codec: Any,
    *,
    model: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> ChunkStream:
    """Wrap :func:`iter_canonical_chunks` in a single-pass :class:`ChunkStream`."""
    provider = getattr(codec, "provider_name", None)
    return ChunkStream(
        iter_canonical_chunks(events, codec, model=model, logger=logger),
        provider=provider,
        model=model,
    )


__all__ = ["iter_canonical_chunks", "normalize_stream"]
