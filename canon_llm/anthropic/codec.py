"""
Anthropic Messages API codec.

Purpose:
- Encode a canonical :class:`Context` into a ``POST /messages`` body and
  decode the reply (or its SSE stream) back into canonical values.

Operations: ``chat`` only; ``embedding`` is rejected with
``InvalidParameter`` before any I/O.

Wire shape::

    {model, system?, messages:[{role, content: string | blocks}],
     tools?:[{name, description, input_schema}], max_tokens, stream?,
     temperature?, top_p?, stop_sequences?}

``max_tokens`` is mandatory for this API; it falls back to the configured
default. Authentication uses the ``x-api-key`` header plus the pinned
``anthropic-version``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from ..base.codec_base import BaseCodec, structured_object
from ..base.constants import OPERATION_CHAT
from ..base.dto.request_options import RequestOptions
from ..base.models import Context, Message, Model, Response, TextPart
from ..base.utils.wire_body import maybe_put
from ..base.wire import StreamEvent
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_DEFAULT_MAX_TOKENS
from .context import encode_context
from .helpers import decode_content_blocks, normalize_stop_reason
from .stream_helpers import AnthropicStreamState, decode_anthropic_event


class AnthropicCodec(BaseCodec):
    """Codec for the Anthropic Messages API."""

    provider_name = "anthropic"
    label = "Anthropic"
    supported_operations = (OPERATION_CHAT,)
    default_base_url = ANTHROPIC_DEFAULT_BASE_URL

    def _url(self, base_url: str, operation: str) -> str:
        return f"{base_url}/messages"

    def _headers(self, api_key: str, config: Mapping[str, Any]) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": str(config.get("api_version") or ANTHROPIC_API_VERSION),
            "content-type": "application/json",
        }

    def _encode_body(self, context: Context, model: Model, options: RequestOptions, config: Mapping[str, Any]) -> Dict[str, Any]:
        body = encode_context(context, model)
        max_tokens = options.max_tokens or model.max_tokens or config.get("max_tokens") or ANTHROPIC_DEFAULT_MAX_TOKENS
        body["max_tokens"] = int(max_tokens)
        if options.stream:
            body["stream"] = True
        maybe_put(body, "temperature", options.temperature if options.temperature is not None else model.temperature)
        maybe_put(body, "top_p", options.top_p)
        if options.stop is not None:
            body["stop_sequences"] = [options.stop] if isinstance(options.stop, str) else list(options.stop)
        return body

    def _build_response(self, body: Dict[str, Any], model: Model, context: Context) -> Response:
        parts, tool_calls, thinking = decode_content_blocks(body.get("content"))
        provider_meta: Dict[str, Any] = {}
        if thinking:
            provider_meta["thinking"] = "".join(thinking)
        if body.get("stop_sequence"):
            provider_meta["stop_sequence"] = body["stop_sequence"]
        message = Message(role="assistant", content=parts or [TextPart("")], tool_calls=tool_calls or None)
        return Response(
            id=str(body.get("id") or ""),
            model=str(body.get("model") or model.model),
            context=context,
            message=message,
            usage=self.extract_usage(body, model),
            finish_reason=normalize_stop_reason(body.get("stop_reason")),
            object=structured_object(tool_calls),
            provider_meta=provider_meta,
        )

    def new_stream_state(self) -> AnthropicStreamState:
        return AnthropicStreamState()

    def decode_stream_event(self, event: StreamEvent, state: AnthropicStreamState) -> Tuple[List[Any], AnthropicStreamState]:
        return decode_anthropic_event(event, state)


__all__ = ["AnthropicCodec"]
