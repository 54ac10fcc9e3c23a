"""
Top-level operations.

Purpose
-------
Tie the pieces together for one request: resolve the model, dispatch the
codec, validate options, check the model registry and resolve the
credential, all before any I/O; then encode, hand the request to the
transport and decode (or normalize the stream).

Public API
----------
- ``generate_text(model, context, **options) -> Response``
- ``stream_text(model, context, **options) -> Response`` (streaming)
- ``generate_object(model, context, schema, **options) -> Response``
- ``stream_object(model, context, schema, **options) -> Response`` (streaming)
- ``embed(model, text, **options) -> list[float] | list[list[float]]``

Failure modes
-------------
- Construction errors (``InvalidProvider``, ``InvalidParameter``) are raised.
- Vendor and transport failures of ``generate_*`` are returned on
  ``Response.error``; ``embed`` raises them because it has no response
  object to carry them.
- Stream faults surface from the chunk iterator as ``APIStreamError``, or as
  a ``Failure`` from ``join_stream``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .base.constants import OPERATION_CHAT, OPERATION_EMBEDDING, STRUCTURED_OUTPUT_TOOL
from .base.dto.request_options import RequestOptions
from .base.errors import ProviderError, translate_exception, translate_http_error
from .base.factory import CodecFactory
from .base.http.transport import HttpxTransport
from .base.interfaces import Transport
from .base.logging import LogContext, get_logger, normalized_log_event
from .base.models import Context, Message, Model, Response, Tool
from .base.repositories import KeysRepository, ModelRegistry, resolve_secret
from .base.streaming import normalize_stream
from .base.utils.wire_body import ensure_parsed_body
from .config import get_provider_config

_logger = get_logger("canon_llm.client")

ModelSpec = Union[str, Model]
ContextInput = Union[str, Context, Sequence[Message]]

_TOOL_CHOICE = {
    "openai": {"type": "function", "function": {"name": STRUCTURED_OUTPUT_TOOL}},
    "anthropic": {"type": "tool", "name": STRUCTURED_OUTPUT_TOOL},
}


@dataclass(frozen=True)
class PreparedCall:
    """Everything resolved for one request before any I/O."""

    model: Model
    codec: Any
    options: RequestOptions
    api_key: str
    config: Dict[str, Any]


def as_context(value: ContextInput) -> Context:
    """Accept a prompt string, a message list or a :class:`Context`."""
    if isinstance(value, Context):
        return value
    if isinstance(value, str):
        return Context.of(Context.user(value))
    return Context(messages=list(value))


class Client:
    """Request orchestrator over a transport, a model registry and a key repository."""

    def __init__(
        self,
        transport: Optional[Transport] = None,
        registry: Optional[ModelRegistry] = None,
        keys: Optional[KeysRepository] = None,
    ) -> None:
        self.transport = transport if transport is not None else HttpxTransport()
        self.registry = registry if registry is not None else ModelRegistry.from_config()
        self.keys = keys if keys is not None else KeysRepository()

    def prepare(self, model_spec: ModelSpec, operation: str, options: Optional[Mapping[str, Any]] = None) -> PreparedCall:
        """Resolve and validate a call. Raises on any construction error."""
        model = Model.from_spec(model_spec)
        codec = CodecFactory.create(model.provider)
        codec.check_operation(operation)
        opts = RequestOptions.parse(options)
        config = get_provider_config(model.provider)
        self.registry.require(model)
        api_key = resolve_secret(model, opts, self.keys)
        return PreparedCall(model=model, codec=codec, options=opts, api_key=api_key, config=config)

    # --------------------------------------------------------------- chat

    def generate_text(self, model_spec: ModelSpec, context: ContextInput, **options: Any) -> Response:
        options["stream"] = False
        call = self.prepare(model_spec, OPERATION_CHAT, options)
        ctx = as_context(context)
        request = call.codec.encode_request(ctx, call.model, call.options, call.api_key, call.config)
        try:
            wire = self.transport.execute(request)
        except ProviderError as exc:
            return self._failed(call, ctx, exc)
        except Exception as exc:
            return self._failed(call, ctx, translate_exception(exc, provider=call.model.provider, model=call.model.model))
        result = call.codec.decode_response(wire, call.model, ctx)
        if not result.ok:
            return self._failed(call, ctx, result.error)
        return result.value

    def stream_text(self, model_spec: ModelSpec, context: ContextInput, **options: Any) -> Response:
        """Return a streaming response; the transport is not touched until the stream is pulled."""
        options["stream"] = True
        call = self.prepare(model_spec, OPERATION_CHAT, options)
        ctx = as_context(context)
        request = call.codec.encode_request(ctx, call.model, call.options, call.api_key, call.config)
        stream = normalize_stream(self.transport.stream(request), call.codec, model=call.model.model)
        return Response(id="", model=call.model.model, context=ctx, streaming=True, stream=stream)

    def _object_options(self, model_spec: ModelSpec, options: Dict[str, Any]) -> Dict[str, Any]:
        provider = Model.from_spec(model_spec).provider
        extra = dict(options.get("provider_options") or {})
        choice = _TOOL_CHOICE.get(provider)
        if choice is not None:
            extra.setdefault("tool_choice", choice)
        options["provider_options"] = extra
        return options

    @staticmethod
    def _object_context(context: ContextInput, schema: Mapping[str, Any], description: str) -> Context:
        tool = Tool(name=STRUCTURED_OUTPUT_TOOL, description=description, parameter_schema=dict(schema))
        return as_context(context).with_tools([tool])

    def generate_object(
        self,
        model_spec: ModelSpec,
        context: ContextInput,
        schema: Mapping[str, Any],
        description: str = "Return the answer as structured data matching the schema.",
        **options: Any,
    ) -> Response:
        """Ask for structured output through the reserved ``structured_output`` tool.

        The decoded arguments land in ``Response.object``.
        """
        ctx = self._object_context(context, schema, description)
        return self.generate_text(model_spec, ctx, **self._object_options(model_spec, options))

    def stream_object(
        self,
        model_spec: ModelSpec,
        context: ContextInput,
        schema: Mapping[str, Any],
        description: str = "Return the answer as structured data matching the schema.",
        **options: Any,
    ) -> Response:
        ctx = self._object_context(context, schema, description)
        return self.stream_text(model_spec, ctx, **self._object_options(model_spec, options))

    # ---------------------------------------------------------- embedding

    def embed(self, model_spec: ModelSpec, text: Union[str, Sequence[str]], **options: Any) -> Union[List[float], List[List[float]]]:
        """Embed one text (returns one vector) or a list of texts (one vector each)."""
        call = self.prepare(model_spec, OPERATION_EMBEDDING, options)
        codec = call.codec
        request = codec.encode_embedding_request(text, call.model, call.options, call.api_key, call.config)
        wire = self.transport.execute(request)
        body = ensure_parsed_body(wire.body)
        if not 200 <= wire.status < 300:
            raise translate_http_error(
                wire.status, body, provider=call.model.provider, model=call.model.model, reason=f"{codec.label} API error"
            )
        try:
            vectors = codec.decode_embeddings(body)
        except ValueError as exc:
            raise translate_http_error(
                wire.status, body, provider=call.model.provider, model=call.model.model, reason=str(exc)
            ) from exc
        return vectors[0] if isinstance(text, str) else vectors

    def _failed(self, call: PreparedCall, ctx: Context, error: ProviderError) -> Response:
        normalized_log_event(
            _logger,
            "request.failed",
            LogContext(provider=call.model.provider, model=call.model.model, operation=OPERATION_CHAT),
            phase="execute",
            error_code=error.code.value,
            emitted=False,
            error=str(error),
        )
        return Response(id="", model=call.model.model, context=ctx, error=error)


_default_client: Optional[Client] = None


def default_client() -> Client:
    global _default_client
    if _default_client is None:
        _default_client = Client()
    return _default_client


def generate_text(model_spec: ModelSpec, context: ContextInput, **options: Any) -> Response:
    return default_client().generate_text(model_spec, context, **options)


def stream_text(model_spec: ModelSpec, context: ContextInput, **options: Any) -> Response:
    return default_client().stream_text(model_spec, context, **options)


def generate_object(model_spec: ModelSpec, context: ContextInput, schema: Mapping[str, Any], **options: Any) -> Response:
    return default_client().generate_object(model_spec, context, schema, **options)


def stream_object(model_spec: ModelSpec, context: ContextInput, schema: Mapping[str, Any], **options: Any) -> Response:
    return default_client().stream_object(model_spec, context, schema, **options)


def embed(model_spec: ModelSpec, text: Union[str, Sequence[str]], **options: Any) -> Union[List[float], List[List[float]]]:
    return default_client().embed(model_spec, text, **options)


__all__ = [
    "Client",
    "PreparedCall",
    "as_context",
    "default_client",
    "generate_text",
    "stream_text",
    "generate_object",
    "stream_object",
    "embed",
]
