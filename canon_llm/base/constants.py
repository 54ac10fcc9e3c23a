"""Base shared constants.

Central location to avoid scattering magic strings across codecs.

# pragma: allowlist secret
"""
from __future__ import annotations

# Reserved tool name carrying structured (JSON) output instead of free text.
STRUCTURED_OUTPUT_TOOL = "structured_output"

# Operations a codec may support.
OPERATION_CHAT = "chat"
OPERATION_EMBEDDING = "embedding"

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

__all__ = [
    "STRUCTURED_OUTPUT_TOOL",
    "OPERATION_CHAT",
    "OPERATION_EMBEDDING",
    "MISSING_API_KEY_ERROR",
]
