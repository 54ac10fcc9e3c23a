"""Single-pass wrapper around a lazy chunk iterator."""
from __future__ import annotations

from typing import Iterator, Optional

from ..errors import APIStreamError
from .chunks import StreamChunk


class ChunkStream:
    """A chunk sequence that can be iterated exactly once.

    A second ``iter()`` raises :class:`APIStreamError` instead of silently
    yielding nothing, so an already-consumed stream is never mistaken for an
    empty one.
    """

    def __init__(self, chunks: Iterator[StreamChunk], *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        self._chunks = chunks
        self._started = False
        self.provider = provider
        self.model = model

    @property
    def consumed(self) -> bool:
        return self._started

    def __iter__(self) -> Iterator[StreamChunk]:
        if self._started:
            raise APIStreamError(message="stream already consumed", provider=self.provider, model=self.model)
        self._started = True
        return self._chunks


__all__ = ["ChunkStream"]
