"""Transport Protocol (single-class module).

The only component that performs network I/O. ``stream`` yields framed
server-sent events in arrival order and releases the connection when the
iterator is closed or exhausted.
"""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from ..wire import StreamEvent, WireRequest, WireResponse


@runtime_checkable
class Transport(Protocol):
    def execute(self, request: WireRequest) -> WireResponse:
        ...

    def stream(self, request: WireRequest) -> Iterator[StreamEvent]:
        ...
