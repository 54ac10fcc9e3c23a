"""
Shared skeleton for vendor codecs.

Purpose:
- Hold the checks every codec runs before encoding: the model's provider tag
  must match the codec and the operation must be supported.
- Turn a non-success :class:`WireResponse` into an :class:`APIResponseError`
  value, and a success body into a :class:`Response` through the vendor hook
  ``_build_response``.
- Emit the ``request.encode`` / ``response.decode`` / ``response.error``
  structured log events.

Subclasses provide the vendor specifics: ``provider_name``, ``label``,
``supported_operations``, ``_url``, ``_headers``, ``_encode_body``,
``_build_response``, ``new_stream_state`` and ``decode_stream_event``.

No network I/O happens here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .constants import OPERATION_CHAT, STRUCTURED_OUTPUT_TOOL
from .dto.request_options import RequestOptions
from .errors import InvalidParameter, InvalidProvider, translate_http_error
from .logging import LogContext, get_logger, normalized_log_event
from .models import Context, Model, Response, ToolCall
from .result import Failure, Success
from .tokens import canonical_token_usage
from .utils.wire_body import ensure_parsed_body
from .wire import WireRequest, WireResponse

_logger = get_logger("canon_llm.codec")


class BaseCodec:
    """Common behaviour of the OpenAI-style and Anthropic-style codecs."""

    provider_name: str = ""
    label: str = ""
    supported_operations: Tuple[str, ...] = (OPERATION_CHAT,)
    default_base_url: str = ""

    def check_model(self, model: Model) -> None:
        """Raise :class:`InvalidProvider` when ``model`` targets another provider."""
        if model.provider != self.provider_name:
            raise InvalidProvider(
                provider=model.provider,
                model=model.model,
                message=f"model provider '{model.provider}' does not match codec '{self.provider_name}'",
            )

    def check_operation(self, operation: str) -> None:
        """Raise :class:`InvalidParameter` for an operation this codec does not implement."""
        if operation not in self.supported_operations:
            supported = ", ".join(repr(op) for op in self.supported_operations)
            raise InvalidParameter(
                parameter=(
                    f"operation: {operation!r} not supported by {self.label} provider. "
                    f"Supported operations: [{supported}]"
                ),
                provider=self.provider_name,
            )

    def base_url(self, options: RequestOptions, config: Optional[Mapping[str, Any]] = None) -> str:
        url = options.base_url or (config or {}).get("base_url") or self.default_base_url
        return str(url).rstrip("/")

    # ---------------------------------------------------------------- encode

    def encode_request(
        self,
        context: Context,
        model: Model,
        options: RequestOptions,
        api_key: str,
        config: Optional[Mapping[str, Any]] = None,
    ) -> WireRequest:
        """Build the chat request for ``context``.

        Raises ``InvalidProvider`` / ``InvalidParameter`` before anything is sent.
        """
        self.check_model(model)
        self.check_operation(OPERATION_CHAT)
        body = self._encode_body(context, model, options, config or {})
        if options.provider_options:
            body.update(options.provider_options)
        normalized_log_event(
            _logger,
            "request.encode",
            LogContext(provider=self.provider_name, model=model.model, operation=OPERATION_CHAT),
            phase="encode",
            emitted=None,
            tokens=None,
            stream=bool(options.stream),
            messages=len(context.messages),
            tools=len(context.tools),
        )
        return WireRequest(
            method="POST",
            url=self._url(self.base_url(options, config), OPERATION_CHAT),
            headers=self._headers(api_key, config or {}),
            body=body,
            stream=bool(options.stream),
        )

    def _url(self, base_url: str, operation: str) -> str:
        raise NotImplementedError

    def _headers(self, api_key: str, config: Mapping[str, Any]) -> Dict[str, str]:
        raise NotImplementedError

    def _encode_body(self, context: Context, model: Model, options: RequestOptions, config: Mapping[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    # ---------------------------------------------------------------- decode

    def decode_response(self, wire: WireResponse, model: Model, context: Context) -> "Success[Response] | Failure[Any]":
        """Decode a non-streaming response. Errors are returned, never raised."""
        ctx = LogContext(provider=self.provider_name, model=model.model, operation=OPERATION_CHAT)
        body = ensure_parsed_body(wire.body)
        if not 200 <= wire.status < 300:
            err = translate_http_error(
                wire.status,
                body,
                provider=self.provider_name,
                model=model.model,
                reason=f"{self.label} API error",
            )
            normalized_log_event(
                _logger,
                "response.error",
                ctx,
                phase="decode",
                error_code=err.code.value,
                emitted=False,
                status=wire.status,
            )
            return Failure(err)
        if not isinstance(body, dict):
            err = translate_http_error(
                wire.status,
                body,
                provider=self.provider_name,
                model=model.model,
                reason=f"{self.label} API returned a non-JSON body",
            )
            return Failure(err)
        try:
            response = self._build_response(body, model, context)
        except Exception as exc:
            err = translate_http_error(
                wire.status,
                body,
                provider=self.provider_name,
                model=model.model,
                reason=f"{self.label} API returned an unexpected body",
            )
            err.raw = exc
            err.__cause__ = exc
            normalized_log_event(
                _logger,
                "response.error",
                ctx,
                phase="decode",
                error_code=err.code.value,
                emitted=False,
                status=wire.status,
                error=repr(exc),
            )
            return Failure(err)
        normalized_log_event(
            _logger,
            "response.decode",
            ctx,
            phase="decode",
            emitted=True,
            tokens=canonical_token_usage(response.usage),
            response_id=response.id,
            finish_reason=response.finish_reason,
        )
        return Success(response)

    def _build_response(self, body: Dict[str, Any], model: Model, context: Context) -> Response:
        raise NotImplementedError

    def extract_usage(self, body: Any, model: Model) -> Optional[Dict[str, Any]]:
        """Return ``body["usage"]`` when it is a mapping, else ``None``."""
        if isinstance(body, Mapping):
            usage = body.get("usage")
            if isinstance(usage, Mapping):
                return dict(usage)
        return None

    # ---------------------------------------------------------------- stream

    def new_stream_state(self) -> Any:
        raise NotImplementedError

    def decode_stream_event(self, event: Any, state: Any) -> Tuple[List[Any], Any]:
        raise NotImplementedError


def structured_object(tool_calls: List[ToolCall]) -> Optional[Dict[str, Any]]:
    """Arguments of the structured-output tool call, when present."""
    for call in tool_calls:
        if call.name == STRUCTURED_OUTPUT_TOOL:
            return call.arguments
    return None


__all__ = ["BaseCodec", "structured_object"]
