"""
Model Registry

Read-only, in-memory catalog of the models each provider accepts. Seeded
from ``canon_llm.config.defaults.DEFAULT_MODELS`` plus any ``models`` list in
the provider's config section. Lookups fail fast: an unknown model is
rejected before a request is encoded.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from ...config import get_provider_config
from ...config.defaults import DEFAULT_MODELS
from ..errors import InvalidParameter
from ..models import Model


class ModelRegistry:
    """Provider -> known model names."""

    def __init__(self, models: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        source = models if models is not None else DEFAULT_MODELS
        self._models: Dict[str, FrozenSet[str]] = {p.lower(): frozenset(names) for p, names in source.items()}

    @classmethod
    def from_config(cls) -> "ModelRegistry":
        merged: Dict[str, set] = {p: set(names) for p, names in DEFAULT_MODELS.items()}
        for provider in list(merged):
            extra = get_provider_config(provider).get("models")
            if isinstance(extra, (list, tuple)):
                merged[provider].update(str(m) for m in extra)
        return cls(merged)

    def providers(self) -> FrozenSet[str]:
        return frozenset(self._models)

    def exists(self, provider: str, model: str) -> bool:
        return model in self._models.get((provider or "").lower(), frozenset())

    def require(self, model: Model) -> Model:
        """Return ``model`` when known; raise :class:`InvalidParameter` otherwise."""
        if not self.exists(model.provider, model.model):
            raise InvalidParameter(
                parameter=f"model: {model.model}",
                provider=model.provider,
                model=model.model,
            )
        return model


__all__ = ["ModelRegistry"]
