"""
Provider-agnostic domain models public surface.

This module re-exports the implementations under
``canon_llm.base.models_parts`` so callers have one stable import path.
"""

from .models_parts.content_part import (
    ContentPart,
    ContentPartType,
    FilePart,
    ImagePart,
    ImageUrlPart,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)
from .models_parts.message import Message, Role, ROLES, ToolCall
from .models_parts.tool import Tool
from .models_parts.context import Context
from .models_parts.model_spec import Model
from .models_parts.response import Response

__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextPart",
    "ToolCallPart",
    "ToolResultPart",
    "ImagePart",
    "ImageUrlPart",
    "FilePart",
    "Message",
    "Role",
    "ROLES",
    "ToolCall",
    "Tool",
    "Context",
    "Model",
    "Response",
]
