"""
Canonical content part variants.

A message's content is an ordered list of parts. Each part is exactly one of
the variants below; fields of other variants do not exist on the instance.
The ``type`` tag is a class constant used for serialization and wire
encoding.
"""
from __future__ import annotations

import base64
from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Literal, Optional, Union


ContentPartType = Literal["text", "tool_call", "tool_result", "image", "image_url", "file"]


def _as_base64(data: Union[bytes, str]) -> str:
    if isinstance(data, (bytes, bytearray)):
        return base64.b64encode(bytes(data)).decode("ascii")
    return data


class _PartBase:
    type: ClassVar[str]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the part."""
        data = asdict(self)  # type: ignore[call-overload]
        return {"type": self.type, **data}


class _InlineDataMixin(_PartBase):
    data: Union[bytes, str]

    def base64_data(self) -> str:
        """``data`` as a base64 string, encoding raw bytes on the fly."""
        return _as_base64(self.data)

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["data"] = self.base64_data()
        return out


@dataclass(frozen=True)
class TextPart(_PartBase):
    """Plain text."""

    text: str
    type: ClassVar[str] = "text"


@dataclass(frozen=True)
class ToolCallPart(_PartBase):
    """A tool invocation requested by the assistant.

    Attributes:
        tool_name: Name of the tool being called.
        input: Arguments mapping (may be partial while streaming).
        tool_call_id: Vendor call identifier; ``None`` when the vendor omits it.
    """

    tool_name: Optional[str]
    input: Optional[Dict[str, Any]] = field(default_factory=dict)
    tool_call_id: Optional[str] = None
    type: ClassVar[str] = "tool_call"


@dataclass(frozen=True)
class ToolResultPart(_PartBase):
    """Output of a tool, sent back to the model. ``output`` may be any JSON value."""

    tool_call_id: str
    output: Any
    type: ClassVar[str] = "tool_result"


@dataclass(frozen=True)
class ImagePart(_InlineDataMixin):
    """Inline image; ``data`` is raw bytes or an already base64-encoded string."""

    data: Union[bytes, str]
    media_type: str = "image/png"
    type: ClassVar[str] = "image"


@dataclass(frozen=True)
class ImageUrlPart(_PartBase):
    url: str
    type: ClassVar[str] = "image_url"


@dataclass(frozen=True)
class FilePart(_InlineDataMixin):
    """Inline document; ``data`` is raw bytes or an already base64-encoded string."""

    data: Union[bytes, str]
    media_type: str = "application/pdf"
    filename: Optional[str] = None
    type: ClassVar[str] = "file"


ContentPart = Union[TextPart, ToolCallPart, ToolResultPart, ImagePart, ImageUrlPart, FilePart]


__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextPart",
    "ToolCallPart",
    "ToolResultPart",
    "ImagePart",
    "ImageUrlPart",
    "FilePart",
]
