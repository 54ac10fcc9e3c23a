"""
Message DTO used across providers.

Defines the `Message` dataclass, the `Role` literal and the `ToolCall`
record attached to assistant messages. Content is always an ordered list of
canonical parts; order is significant.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from .content_part import ContentPart


# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool"]
ROLES = ("system", "user", "assistant", "tool")


@dataclass(frozen=True)
class ToolCall:
    """A completed tool call as exposed on an assistant message.

    ``name`` and ``arguments`` may be ``None`` when derived from malformed
    content parts; ``id`` is ``None`` when the vendor did not supply one.
    """

    name: Optional[str]
    arguments: Optional[Dict[str, Any]]
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments, "id": self.id}


@dataclass(frozen=True)
class Message:
    """A chat message.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"``,
            ``"assistant"``, or ``"tool"``).
        content: Ordered list of content parts.
        tool_calls: Tool calls requested by the assistant, when any.
        metadata: Free-form mapping; empty by default.
    """

    role: Role
    content: List[ContentPart] = field(default_factory=list)
    tool_calls: Optional[List[ToolCall]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": [p.to_dict() for p in self.content],
            "tool_calls": [c.to_dict() for c in self.tool_calls] if self.tool_calls is not None else None,
            "metadata": dict(self.metadata),
        }


__all__ = [
    "Message",
    "Role",
    "ROLES",
    "ToolCall",
]
