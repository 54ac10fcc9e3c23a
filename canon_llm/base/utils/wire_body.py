"""Helpers for assembling and reading vendor JSON bodies."""
from __future__ import annotations

import json
from typing import Any, Dict, MutableMapping


def maybe_put(body: MutableMapping[str, Any], key: str, value: Any) -> MutableMapping[str, Any]:
    """Set ``body[key]`` only when ``value`` is not ``None``."""
    if value is not None:
        body[key] = value
    return body


def drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def ensure_parsed_body(body: Any) -> Any:
    """Return ``body`` decoded from JSON when it is a JSON string, else unchanged."""
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            return json.loads(body)
        except ValueError:
            return body
    return body


__all__ = ["maybe_put", "drop_none", "ensure_parsed_body"]
