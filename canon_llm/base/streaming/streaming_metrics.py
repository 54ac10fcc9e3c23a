"""Streaming metrics for one normalizer run."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..tokens import canonical_token_usage


@dataclass
class StreamMetrics:
    """Counters collected while a chunk sequence is pulled.

    Attributes:
        events: Raw wire events consumed.
        emitted: Canonical chunks yielded.
        time_to_first_token_ms: Delay until the first content or thinking chunk.
        total_duration_ms: Set when the run ends (normally or not).
        tokens: Canonical usage view of the last usage map seen.
    """

    events: int = 0
    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Any]] = None
    started_at: float = field(default_factory=time.monotonic)

    def _elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * 1000.0

    def mark_token(self) -> None:
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()

    def record_usage(self, usage: Optional[Mapping[str, Any]]) -> None:
        if isinstance(usage, Mapping):
            self.tokens = canonical_token_usage(usage)

    def finish(self) -> None:
        self.total_duration_ms = self._elapsed_ms()


__all__ = ["StreamMetrics"]
