"""
Conversation context handed to a codec.

Codecs read a context and never mutate it. The classmethod helpers build
single-part messages for the common roles.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .content_part import ContentPart, TextPart, ToolResultPart
from .message import Message
from .tool import Tool


@dataclass(frozen=True)
class Context:
    """Ordered messages plus the tools offered to the model."""

    messages: List[Message] = field(default_factory=list)
    tools: List[Tool] = field(default_factory=list)

    @classmethod
    def of(cls, *messages: Message, tools: Optional[Sequence[Tool]] = None) -> "Context":
        return cls(messages=list(messages), tools=list(tools or ()))

    @staticmethod
    def system(text: str) -> Message:
        return Message(role="system", content=[TextPart(text)])

    @staticmethod
    def user(content: "str | List[ContentPart]") -> Message:
        parts = [TextPart(content)] if isinstance(content, str) else list(content)
        return Message(role="user", content=parts)

    @staticmethod
    def assistant(text: str) -> Message:
        return Message(role="assistant", content=[TextPart(text)])

    @staticmethod
    def tool_result(tool_call_id: str, output: Any) -> Message:
        return Message(role="tool", content=[ToolResultPart(tool_call_id=tool_call_id, output=output)])

    def with_tools(self, tools: Sequence[Tool]) -> "Context":
        """Return a copy offering ``tools`` in addition to the existing ones."""
        return Context(messages=list(self.messages), tools=[*self.tools, *tools])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messages": [m.to_dict() for m in self.messages],
            "tools": [t.to_anthropic_format() for t in self.tools],
        }


__all__ = ["Context"]
