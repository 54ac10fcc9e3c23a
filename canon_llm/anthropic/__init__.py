"""Anthropic Messages API codec package."""

from .codec import AnthropicCodec

__all__ = ["AnthropicCodec"]
