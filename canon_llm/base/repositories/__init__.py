"""Read-only lookups: credentials and the model registry."""

from .keys import KeyResolution, KeysRepository, resolve_secret
from .model_registry import ModelRegistry

__all__ = ["KeyResolution", "KeysRepository", "resolve_secret", "ModelRegistry"]
