"""
Wire-level value types exchanged between codecs and the transport.

Codecs produce a :class:`WireRequest`; the transport answers with a
:class:`WireResponse` or an iterator of :class:`StreamEvent` frames (one per
server-sent event).
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WireRequest:
    """A fully encoded vendor HTTP request. ``body`` is JSON-serializable."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)
    stream: bool = False


@dataclass(frozen=True)
class WireResponse:
    """Vendor HTTP response; ``body`` is parsed JSON when possible, else text."""

    status: int
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class StreamEvent:
    """One server-sent event frame.

    Attributes:
        event: SSE ``event:`` field (``None`` when the vendor omits it).
        data: Raw ``data:`` payload, usually a JSON document.
    """

    event: Optional[str]
    data: str

    def json(self) -> Any:
        """Parse ``data`` as JSON; raises ``ValueError`` on malformed payloads."""
        return json.loads(self.data)


__all__ = ["WireRequest", "WireResponse", "StreamEvent"]
