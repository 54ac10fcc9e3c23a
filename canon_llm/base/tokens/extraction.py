"""Token usage extraction helpers.

Vendors report usage with different key names. Responses keep the vendor's
usage map untouched; this module only derives the canonical logging view

    {"prompt": <int|None>, "completion": <int|None>, "total": <int|None>}

Supported key shapes
--------------------
OpenAI:
    ``prompt_tokens``, ``completion_tokens``, ``total_tokens``
Anthropic:
    ``input_tokens``, ``output_tokens`` (no total; it is derived)

Missing or negative values become ``None``; the helper never raises.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

CanonicalUsage = Dict[str, Optional[int]]

PLACEHOLDER_USAGE: CanonicalUsage = {"prompt": None, "completion": None, "total": None}


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)) and value >= 0:
        return int(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def canonical_token_usage(usage: Optional[Mapping[str, Any]]) -> CanonicalUsage:
    """Map a vendor usage mapping onto prompt/completion/total counts."""
    if not isinstance(usage, Mapping):
        return dict(PLACEHOLDER_USAGE)
    prompt = _coerce_int(usage.get("prompt_tokens", usage.get("input_tokens")))
    completion = _coerce_int(usage.get("completion_tokens", usage.get("output_tokens")))
    total = _coerce_int(usage.get("total_tokens"))
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": total}


__all__ = ["CanonicalUsage", "PLACEHOLDER_USAGE", "canonical_token_usage"]
