"""Server-sent events framing.

Groups decoded text lines into :class:`StreamEvent` frames: ``event:`` sets
the event name, ``data:`` lines are joined with newlines, a blank line ends
the frame and ``:`` lines are comments.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from ..wire import StreamEvent


def iter_sse_events(lines: Iterable[str]) -> Iterator[StreamEvent]:
    event: Optional[str] = None
    data: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            if data:
                yield StreamEvent(event=event, data="\n".join(data))
            event, data = None, []
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if name == "event":
            event = value
        elif name == "data":
            data.append(value)
    if data:
        yield StreamEvent(event=event, data="\n".join(data))


__all__ = ["iter_sse_events"]
