"""Default httpx-backed transport.

``execute`` performs one request and returns the status and parsed body
whatever the status; turning a non-2xx answer into an error is the codec's
job. ``stream`` opens a streaming request and yields SSE frames; a non-2xx
answer there raises :class:`APIResponseError` because there is no event
sequence to hand to a codec.

Transport faults (connection errors, timeouts) are raised as canonical
:class:`ProviderError` values via ``translate_exception``.
"""
from __future__ import annotations

from typing import Iterator, Optional

import httpx

from ..errors import translate_exception, translate_http_error
from ..logging import LogContext, get_logger, normalized_log_event
from ..utils.wire_body import ensure_parsed_body
from ..wire import StreamEvent, WireRequest, WireResponse
from .client import get_httpx_client
from .sse import iter_sse_events

_logger = get_logger("canon_llm.http")


class HttpxTransport:
    """Synchronous transport over pooled ``httpx.Client`` instances."""

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def _client_for(self, purpose: str) -> httpx.Client:
        return self._client if self._client is not None else get_httpx_client(None, purpose)

    def execute(self, request: WireRequest) -> WireResponse:
        client = self._client_for("chat")
        try:
            resp = client.request(request.method, request.url, headers=request.headers, json=request.body)
        except httpx.HTTPError as exc:
            raise translate_exception(exc) from exc
        normalized_log_event(
            _logger,
            "http.response",
            LogContext(extra={"url": request.url}),
            phase="transport",
            emitted=None,
            tokens=None,
            status=resp.status_code,
        )
        return WireResponse(status=resp.status_code, body=ensure_parsed_body(resp.text), headers=dict(resp.headers))

    def stream(self, request: WireRequest) -> Iterator[StreamEvent]:
        client = self._client_for("stream")
        try:
            with client.stream(request.method, request.url, headers=request.headers, json=request.body) as resp:
                if resp.status_code >= 400:
                    resp.read()
                    raise translate_http_error(resp.status_code, ensure_parsed_body(resp.text))
                yield from iter_sse_events(resp.iter_lines())
        except httpx.HTTPError as exc:
            raise translate_exception(exc) from exc


__all__ = ["HttpxTransport"]
