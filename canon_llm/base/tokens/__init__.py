"""Token usage helpers."""

from .extraction import PLACEHOLDER_USAGE, canonical_token_usage

__all__ = ["PLACEHOLDER_USAGE", "canonical_token_usage"]
