"""ProviderCodec Protocol (single-class module).

The contract every vendor codec satisfies. Codecs are stateless; per-stream
decode state is created by :meth:`new_stream_state` and threaded through
:meth:`decode_stream_event` by the caller.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from ..dto.request_options import RequestOptions
from ..models import Context, Model, Response
from ..result import Failure, Success
from ..streaming.chunks import StreamChunk
from ..wire import StreamEvent, WireRequest, WireResponse


@runtime_checkable
class ProviderCodec(Protocol):
    """Encode canonical requests and decode vendor responses for one provider."""

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g., ``"openai"`` or ``"anthropic"``."""
        ...

    supported_operations: Tuple[str, ...]

    def encode_request(
        self,
        context: Context,
        model: Model,
        options: RequestOptions,
        api_key: str,
        config: Optional[Mapping[str, Any]] = None,
    ) -> WireRequest:
        """Build the vendor request. Raises ``InvalidParameter`` for unencodable input."""
        ...

    def decode_response(self, wire: WireResponse, model: Model, context: Context) -> "Success[Response] | Failure[Any]":
        """Decode a non-streaming vendor response; errors are returned, not raised."""
        ...

    def new_stream_state(self) -> Any:
        """Return fresh per-response decode state."""
        ...

    def decode_stream_event(self, event: StreamEvent, state: Any) -> Tuple[List[StreamChunk], Any]:
        """Decode one framed event into zero or more chunks plus the next state.

        Raises on undecodable events; the normalizer turns that into
        ``APIStreamError``.
        """
        ...

    def extract_usage(self, body: Any, model: Model) -> Optional[Dict[str, Any]]:
        """Return the vendor usage map from a response body, or ``None``."""
        ...
