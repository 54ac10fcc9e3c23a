"""
Response DTO returned by every top-level operation.

A response is either realized (``message`` populated, ``streaming`` false)
or streaming (``stream`` holds the unconsumed chunk sequence, ``message`` is
absent). Materialization produces a new realized response from a streaming
one; the live ``stream`` is never serialized.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional

from .context import Context
from .message import Message


@dataclass(frozen=True)
class Response:
    """Provider-agnostic response from an LLM invocation.

    Attributes:
        id: Vendor response identifier.
        model: Vendor model name that produced the response.
        context: The context that was sent.
        message: Assistant message, once realized.
        streaming: True while ``stream`` has not been materialized.
        stream: Lazy, single-pass sequence of stream chunks.
        usage: Token usage mapping as reported by the vendor.
        finish_reason: Normalized finish reason (``"stop"``, ``"tool_calls"``...).
        object: Structured-output payload, when requested.
        provider_meta: Vendor extras that have no canonical field.
        error: Error value when the call failed.

    Methods:
        to_dict: JSON-serializable view that omits the live stream.
    """

    id: str
    model: str
    context: Context = field(default_factory=Context)
    message: Optional[Message] = None
    streaming: bool = False
    stream: Optional[Iterable[Any]] = None
    usage: Optional[Dict[str, Any]] = None
    finish_reason: Optional[str] = None
    object: Optional[Any] = None
    provider_meta: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def realized(self, **changes: Any) -> "Response":
        """Return the realized counterpart of this response.

        ``streaming`` is cleared and ``stream`` dropped; ``changes`` fill in
        the materialized fields.
        """
        return replace(self, streaming=False, stream=None, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding the live stream."""
        return {
            "id": self.id,
            "model": self.model,
            "context": self.context.to_dict(),
            "message": self.message.to_dict() if self.message is not None else None,
            "streaming": self.streaming,
            "usage": self.usage,
            "finish_reason": self.finish_reason,
            "object": self.object,
            "provider_meta": dict(self.provider_meta),
            "error": str(self.error) if self.error is not None else None,
        }


__all__ = ["Response"]
