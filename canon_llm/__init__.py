"""canon_llm: one canonical request/response model over many LLM vendors.

Quick start::

    import canon_llm
    from canon_llm import Context

    ctx = Context.of(Context.system("Be brief."), Context.user("Hi"))
    resp = canon_llm.generate_text("anthropic:claude-3-5-sonnet-20241022", ctx)
    print(canon_llm.text(resp))

    streaming = canon_llm.stream_text("openai:gpt-4o-mini", ctx)
    for piece in canon_llm.text_stream(streaming):
        print(piece, end="")

Streaming responses can instead be folded with ``join_stream``, which
returns ``Success(response)`` or ``Failure(error)``.
"""

from .base.accessors import finish_reason, object_stream, text, text_stream, tool_calls, usage
from .base.accessors import object as object_of
from .base.constants import STRUCTURED_OUTPUT_TOOL
from .base.errors import (
    APIResponseError,
    APIStreamError,
    ChunkValidationError,
    ErrorCode,
    InvalidParameter,
    InvalidProvider,
    ProviderError,
)
from .base.factory import CodecFactory, get_codec
from .base.models import (
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
from .base.result import Failure, Success
from .base.streaming import chunks, join_stream, normalize_stream
from .client import (
    Client,
    embed,
    generate_object,
    generate_text,
    stream_object,
    stream_text,
)

__all__ = [
    "finish_reason",
    "object_of",
    "object_stream",
    "text",
    "text_stream",
    "tool_calls",
    "usage",
    "STRUCTURED_OUTPUT_TOOL",
    "APIResponseError",
    "APIStreamError",
    "ChunkValidationError",
    "ErrorCode",
    "InvalidParameter",
    "InvalidProvider",
    "ProviderError",
    "CodecFactory",
    "get_codec",
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
    "Success",
    "chunks",
    "join_stream",
    "normalize_stream",
    "Client",
    "embed",
    "generate_object",
    "generate_text",
    "stream_object",
    "stream_text",
]
