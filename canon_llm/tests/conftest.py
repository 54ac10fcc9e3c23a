"""Pytest configuration for the canon_llm test suite.

Provides an isolated environment (no real credentials or config file leak
into tests), an in-memory transport that records requests, SSE frame
builders and a capture handler on the shared package logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest

from canon_llm.base.logging import get_logger
from canon_llm.base.repositories import ModelRegistry
from canon_llm.base.wire import StreamEvent, WireRequest, WireResponse
from canon_llm.config import reset_config_cache

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MAX_TOKENS",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_MAX_TOKENS",
    "CLAUDE_API_KEY",
    "CANON_LLM_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip credentials and config-file pointers from the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


class FakeTransport:
    """Transport double: returns canned responses and records every request."""

    def __init__(self, response: Optional[WireResponse] = None, events: Optional[List[StreamEvent]] = None) -> None:
        self.response = response or WireResponse(status=200, body={})
        self.events = list(events or [])
        self.requests: List[WireRequest] = []
        self.stream_pulls = 0
        self.closed = False

    def execute(self, request: WireRequest) -> WireResponse:
        self.requests.append(request)
        return self.response

    def stream(self, request: WireRequest) -> Iterator[StreamEvent]:
        self.requests.append(request)
        try:
            for event in self.events:
                self.stream_pulls += 1
                yield event
        finally:
            self.closed = True


@pytest.fixture()
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def registry() -> ModelRegistry:
    return ModelRegistry(
        {
            "openai": ["gpt-4o-mini", "text-embedding-3-small"],
            "anthropic": ["claude-3-5-sonnet-20241022"],
        }
    )


def sse(payload: Any, event: Optional[str] = None) -> StreamEvent:
    """Build one SSE frame from a JSON-serializable payload (or a raw string)."""
    data = payload if isinstance(payload, str) else json.dumps(payload)
    return StreamEvent(event=event, data=data)


@pytest.fixture()
def make_sse() -> Callable[..., StreamEvent]:
    return sse


class ListHandler(logging.Handler):
    """Capture log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self) -> List[Dict[str, Any]]:
        return [json.loads(m) for m in self.messages]


@pytest.fixture()
def log_capture() -> Iterator[ListHandler]:
    """Attach a ListHandler to the shared ``canon_llm`` logger."""
    logger = get_logger()
    handler = ListHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
