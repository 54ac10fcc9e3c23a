"""
OpenAI Chat Completions codec.

Purpose:
- Encode a canonical :class:`Context` into a ``POST /chat/completions`` body
  and decode the reply (or its SSE stream) back into canonical values.
- Encode ``POST /embeddings`` requests and decode their vectors.

Operations: ``chat`` and ``embedding``.

Wire shape (chat)::

    {model, messages:[{role, content}], tools?, stream?, stream_options?,
     temperature?, max_tokens?, top_p?, frequency_penalty?,
     presence_penalty?, stop?}

Authentication is a bearer token in the ``authorization`` header.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..base.codec_base import BaseCodec, structured_object
from ..base.constants import OPERATION_CHAT, OPERATION_EMBEDDING
from ..base.dto.request_options import RequestOptions
from ..base.errors import InvalidParameter
from ..base.models import Context, Message, Model, Response, TextPart
from ..base.utils.wire_body import maybe_put
from ..base.wire import StreamEvent, WireRequest
from ..config.defaults import OPENAI_DEFAULT_BASE_URL
from .context import encode_messages
from .helpers import decode_tool_calls, first_choice, reasoning_text
from .stream_helpers import OpenAIStreamState, decode_openai_event


class OpenAICodec(BaseCodec):
    """Codec for the OpenAI Chat Completions and Embeddings APIs."""

    provider_name = "openai"
    label = "OpenAI"
    supported_operations = (OPERATION_CHAT, OPERATION_EMBEDDING)
    default_base_url = OPENAI_DEFAULT_BASE_URL

    def _url(self, base_url: str, operation: str) -> str:
        return f"{base_url}/embeddings" if operation == OPERATION_EMBEDDING else f"{base_url}/chat/completions"

    def _headers(self, api_key: str, config: Mapping[str, Any]) -> Dict[str, str]:
        headers = {"authorization": f"Bearer {api_key}", "content-type": "application/json"}
        organization = config.get("organization")
        if organization:
            headers["openai-organization"] = str(organization)
        return headers

    def _encode_body(self, context: Context, model: Model, options: RequestOptions, config: Mapping[str, Any]) -> Dict[str, Any]:
        body: Dict[str, Any] = {"model": model.model, "messages": encode_messages(context)}
        if context.tools:
            body["tools"] = [t.to_openai_format() for t in context.tools]
        if options.stream:
            body["stream"] = True
            body["stream_options"] = {"include_usage": True}
        maybe_put(body, "temperature", options.temperature if options.temperature is not None else model.temperature)
        maybe_put(body, "max_tokens", options.max_tokens if options.max_tokens is not None else model.max_tokens)
        maybe_put(body, "top_p", options.top_p)
        maybe_put(body, "frequency_penalty", options.frequency_penalty)
        maybe_put(body, "presence_penalty", options.presence_penalty)
        maybe_put(body, "stop", options.stop)
        return body

    def _build_response(self, body: Dict[str, Any], model: Model, context: Context) -> Response:
        choice = first_choice(body)
        raw_message = choice.get("message")
        if not isinstance(raw_message, Mapping):
            raw_message = {}
        text = raw_message.get("content")
        tool_calls = decode_tool_calls(raw_message.get("tool_calls"))
        provider_meta: Dict[str, Any] = {}
        thought = reasoning_text(raw_message)
        if thought:
            provider_meta["thinking"] = thought
        if body.get("system_fingerprint"):
            provider_meta["system_fingerprint"] = body["system_fingerprint"]
        message = Message(
            role="assistant",
            content=[TextPart(text if isinstance(text, str) else "")],
            tool_calls=tool_calls or None,
        )
        return Response(
            id=str(body.get("id") or ""),
            model=str(body.get("model") or model.model),
            context=context,
            message=message,
            usage=self.extract_usage(body, model),
            finish_reason=choice.get("finish_reason"),
            object=structured_object(tool_calls),
            provider_meta=provider_meta,
        )

    # ------------------------------------------------------------ streaming

    def new_stream_state(self) -> OpenAIStreamState:
        return OpenAIStreamState()

    def decode_stream_event(self, event: StreamEvent, state: OpenAIStreamState) -> Tuple[List[Any], OpenAIStreamState]:
        return decode_openai_event(event, state)

    # ------------------------------------------------------------ embeddings

    def encode_embedding_request(
        self,
        text: Union[str, Sequence[str]],
        model: Model,
        options: RequestOptions,
        api_key: str,
        config: Optional[Mapping[str, Any]] = None,
    ) -> WireRequest:
        self.check_model(model)
        self.check_operation(OPERATION_EMBEDDING)
        if isinstance(text, str):
            payload: Union[str, List[str]] = text
        else:
            payload = list(text)
            if not payload or not all(isinstance(t, str) for t in payload):
                raise InvalidParameter(parameter="input: expected a string or a non-empty list of strings", provider=self.provider_name)
        body: Dict[str, Any] = {"model": model.model, "input": payload}
        maybe_put(body, "dimensions", options.dimensions)
        maybe_put(body, "encoding_format", options.encoding_format)
        maybe_put(body, "user", options.user)
        return WireRequest(
            method="POST",
            url=self._url(self.base_url(options, config), OPERATION_EMBEDDING),
            headers=self._headers(api_key, config or {}),
            body=body,
        )

    def decode_embeddings(self, body: Any) -> List[List[float]]:
        """Vectors from an embeddings body, ordered by their ``index``."""
        data = body.get("data") if isinstance(body, Mapping) else None
        if not isinstance(data, list):
            raise ValueError("embedding response has no 'data' list")
        ordered = sorted(data, key=lambda item: item.get("index", 0))
        return [list(item.get("embedding") or []) for item in ordered]


__all__ = ["OpenAICodec"]
