"""
Tool definition shared by all codecs.

A tool is described once with a JSON-schema parameter mapping; each codec
projects it into its vendor shape.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Tool:
    """A callable tool offered to the model.

    Attributes:
        name: Unique tool name.
        description: Human-readable purpose shown to the model.
        parameter_schema: JSON schema of the arguments object.
    """

    name: str
    description: str = ""
    parameter_schema: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_openai_format(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameter_schema,
            },
        }

    def to_anthropic_format(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameter_schema,
        }


__all__ = ["Tool"]
