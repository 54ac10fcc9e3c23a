"""Terminal logging for a normalizer run."""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    error: Optional[BaseException] = None,
    error_code: Optional[str] = None,
) -> None:
    """Emit ``stream.end`` (or ``stream.error``) with the collected metrics."""
    metrics.finish()
    normalized_log_event(
        logger,
        "stream.end" if error is None else "stream.error",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=error_code,
        level=logging.INFO if error is None else logging.WARNING,
        emitted_count=metrics.emitted,
        event_count=metrics.events,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=repr(error) if error is not None else None,
    )


__all__ = ["finalize_stream"]
