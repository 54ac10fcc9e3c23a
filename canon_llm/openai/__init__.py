"""OpenAI Chat Completions codec package."""

from .codec import OpenAICodec

__all__ = ["OpenAICodec"]
