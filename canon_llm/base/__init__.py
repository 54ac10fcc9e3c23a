"""Provider-agnostic core: models, errors, streaming and codec plumbing.

Vendor codecs live in sibling packages (``canon_llm.openai``,
``canon_llm.anthropic``) and depend on this package, never the reverse.
"""

from .errors import (
    APIResponseError,
    APIStreamError,
    ChunkValidationError,
    ErrorCode,
    InvalidParameter,
    InvalidProvider,
    ProviderError,
)
from .models import (
    Context,
    FilePart,
    ImagePart,
    ImageUrlPart,
    Message,
    Model,
    Response,
    TextPart,
    Tool,
    ToolCall,
    ToolCallPart,
    ToolResultPart,
)
from .result import Failure, Result, Success

__all__ = [
    "APIResponseError",
    "APIStreamError",
    "ChunkValidationError",
    "ErrorCode",
    "InvalidParameter",
    "InvalidProvider",
    "ProviderError",
    "Context",
    "FilePart",
    "ImagePart",
    "ImageUrlPart",
    "Message",
    "Model",
    "Response",
    "TextPart",
    "Tool",
    "ToolCall",
    "ToolCallPart",
    "ToolResultPart",
    "Failure",
    "Result",
    "Success",
]
