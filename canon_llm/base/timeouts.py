"""Unified timeout values for the HTTP transport.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration. Supported environment variables
    (all optional, positive floats):
        CANON_LLM_CONNECT_TIMEOUT_SECONDS
        CANON_LLM_HTTP_TIMEOUT_SECONDS
        CANON_LLM_STREAM_TIMEOUT_SECONDS
    The cache is refreshed when any of them changes.

No hard-coded timeouts should appear outside this module.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

_ENV_CONNECT = "CANON_LLM_CONNECT_TIMEOUT_SECONDS"
_ENV_HTTP = "CANON_LLM_HTTP_TIMEOUT_SECONDS"
_ENV_STREAM = "CANON_LLM_STREAM_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Establishing the TCP/TLS connection.
        http_timeout_seconds: Whole non-streaming request.
        stream_timeout_seconds: Idle time allowed between two stream events.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 120.0

    def for_request(self, stream: bool) -> httpx.Timeout:
        read = self.stream_timeout_seconds if stream else self.http_timeout_seconds
        return httpx.Timeout(read, connect=self.connect_timeout_seconds)


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in (_ENV_CONNECT, _ENV_HTTP, _ENV_STREAM))
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    base = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_CONNECT, base.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_HTTP, base.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(_ENV_STREAM, base.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
