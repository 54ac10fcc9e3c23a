"""Response materializer.

``join_stream`` folds the chunk sequence of a streaming response into a
realized one:

- adjacent ``content`` chunks form one text part per run; any other chunk
  kind ends the run;
- ``thinking`` text is kept apart from content, under
  ``provider_meta["thinking"]``;
- ``tool_call`` chunks are grouped by call id (by name when the id is
  missing) and the last arguments state of each group wins; a group whose
  name changes is reported, not guessed at;
- ``meta`` chunks are shallow-merged in order; ``finish_reason``,
  ``usage``, ``response_id`` and ``model`` are lifted into the response
  fields and the rest lands in ``provider_meta``.

A fault while pulling, or an invalid chunk, yields ``Failure`` and leaves the
input response untouched.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..constants import STRUCTURED_OUTPUT_TOOL
from ..errors import APIStreamError, ChunkValidationError, ProviderError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Message, Response, TextPart, ToolCall
from ..result import Failure, Success
from ..tokens import canonical_token_usage
from .chunks import ContentChunk, MetaChunk, ThinkingChunk, ToolCallChunk, validate

_logger = get_logger("canon_llm.materializer")

GroupKey = Tuple[str, Optional[str]]


def _group_key(chunk: ToolCallChunk) -> GroupKey:
    # Id-less calls sharing a name collapse into one group; vendors that omit
    # ids for parallel calls of the same tool cannot be told apart.
    call_id = chunk.call_id
    return ("id", call_id) if call_id else ("name", chunk.name)


class _Fold:
    """Mutable accumulation state for one materialization."""

    def __init__(self) -> None:
        self.parts: List[TextPart] = []
        self.run: Optional[List[str]] = None
        self.thinking: List[str] = []
        self.groups: Dict[GroupKey, ToolCall] = {}
        self.meta: Dict[str, Any] = {}

    def close_run(self) -> None:
        if self.run is not None:
            self.parts.append(TextPart("".join(self.run)))
            self.run = None

    def add(self, chunk: Any) -> Optional[ChunkValidationError]:
        if isinstance(chunk, ContentChunk):
            if self.run is None:
                self.run = []
            self.run.append(chunk.text)
            return None
        self.close_run()
        if isinstance(chunk, ThinkingChunk):
            self.thinking.append(chunk.text)
        elif isinstance(chunk, ToolCallChunk):
            key = _group_key(chunk)
            previous = self.groups.get(key)
            if previous is not None and previous.name != chunk.name:
                return ChunkValidationError(
                    reason=f"tool call {key[1]!r} changed name from {previous.name!r} to {chunk.name!r}"
                )
            self.groups[key] = ToolCall(name=chunk.name, arguments=dict(chunk.arguments), id=chunk.call_id)
        elif isinstance(chunk, MetaChunk):
            self.meta.update(chunk.metadata)
        return None


def _fail(error: ProviderError, ctx: LogContext) -> Failure:
    normalized_log_event(
        _logger,
        "materialize.error",
        ctx,
        phase="materialize",
        error_code=error.code.value,
        emitted=False,
        error=str(error),
    )
    return Failure(error)


def join_stream(response: Response) -> "Success[Response] | Failure[ProviderError]":
    """Materialize a streaming response.

    Returns ``Success(response)`` unchanged when the response is not
    streaming or carries no stream.
    """
    if not response.streaming or response.stream is None:
        return Success(response)

    ctx = LogContext(model=response.model, response_id=response.id, operation="materialize")
    fold = _Fold()
    try:
        for chunk in response.stream:
            checked = validate(chunk)
            if isinstance(checked, Failure):
                return _fail(checked.error, ctx)
            integrity_error = fold.add(chunk)
            if integrity_error is not None:
                return _fail(integrity_error, ctx)
    except APIStreamError as exc:
        return _fail(exc, ctx)
    except Exception as exc:
        return _fail(APIStreamError(cause=exc, model=response.model), ctx)
    fold.close_run()

    meta = dict(fold.meta)
    finish_reason = meta.pop("finish_reason", response.finish_reason)
    usage = meta.pop("usage", response.usage)
    response_id = meta.pop("response_id", None) or response.id
    model = meta.pop("model", None) or response.model
    provider_meta = {**response.provider_meta, **meta}
    if fold.thinking:
        provider_meta["thinking"] = "".join(fold.thinking)

    tool_calls = list(fold.groups.values())
    structured = next((c.arguments for c in tool_calls if c.name == STRUCTURED_OUTPUT_TOOL), None)
    message = Message(
        role="assistant",
        content=fold.parts or [TextPart("")],
        tool_calls=tool_calls or None,
        metadata={},
    )
    realized = response.realized(
        id=str(response_id),
        model=str(model),
        message=message,
        finish_reason=finish_reason,
        usage=usage,
        provider_meta=provider_meta,
        object=structured if structured is not None else response.object,
    )
    normalized_log_event(
        _logger,
        "materialize.end",
        ctx,
        phase="materialize",
        emitted=True,
        tokens=canonical_token_usage(usage),
        text_parts=len(message.content),
        tool_calls=len(tool_calls),
        finish_reason=finish_reason,
    )
    return Success(realized)


__all__ = ["join_stream"]
