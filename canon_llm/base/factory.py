"""Codec Factory utilities.

Purpose
-------
Resolve a provider tag to its codec. The set of providers is closed: every
supported tag is listed once in ``CodecFactory._CODECS``. Codec modules are
imported lazily with ``importlib`` so importing the package does not pull in
every vendor module.

External dependencies
---------------------
Standard library only (``importlib``).

Failure modes
-------------
- Unknown tag: :class:`InvalidProvider`.
- A registered module or class that cannot be loaded: :class:`InvalidProvider`
  chained to the import error.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

from .errors import InvalidProvider


class CodecFactory:
    """Create codecs from a canonical provider tag (e.g., ``"openai"``)."""

    _CODECS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "canon_llm.openai.codec", "class": "OpenAICodec"},
        "anthropic": {"module": "canon_llm.anthropic.codec", "class": "AnthropicCodec"},
    }

    _instances: Dict[str, Any] = {}

    @classmethod
    def create(cls, provider: str) -> Any:
        """Return the codec for ``provider``.

        Codecs are stateless, so one instance per tag is cached and reused.

        Raises
        ------
        InvalidProvider
            If the tag is not registered or its codec cannot be loaded.
        """
        name = (provider or "").lower().strip()
        cached = cls._instances.get(name)
        if cached is not None:
            return cached
        spec = cls._CODECS.get(name)
        if not spec:
            raise InvalidProvider(
                provider=provider,
                message=f"unknown provider '{provider}'; supported: {', '.join(cls.supported())}",
            )
        module_path, class_name = spec["module"], spec["class"]
        try:
            klass = getattr(import_module(module_path), class_name)
        except (ImportError, AttributeError) as exc:
            raise InvalidProvider(
                provider=provider,
                message=f"failed to load codec '{module_path}.{class_name}': {exc}",
                raw=exc,
            ) from exc
        codec = klass()
        cls._instances[name] = codec
        return codec

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported provider tags in deterministic order."""
        return tuple(cls._CODECS.keys())


def get_codec(provider: str) -> Any:
    """Shortcut for :meth:`CodecFactory.create`."""
    return CodecFactory.create(provider)


__all__ = ["CodecFactory", "get_codec"]
