"""
Keys Repository

Purpose
- Resolve the API key for one request.
- Priority: explicit ``api_key`` option, then provider config (file or
  ``<PROVIDER>_API_KEY``), then the env var map in ``canon_llm.config.env``.
- Fail fast: a request without a credential never reaches the transport.

Usage
- key = resolve_secret(Model.from_spec("openai:gpt-4o"), options)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ...config import get_provider_config
from ...config.env import is_placeholder, resolve_provider_key
from ..constants import MISSING_API_KEY_ERROR
from ..dto.request_options import RequestOptions
from ..errors import InvalidParameter
from ..models import Model


@dataclass
class KeyResolution:
    provider: str
    api_key: Optional[str]
    source: str  # "option", "config", "env", "none"
    extra: Dict[str, Any] = field(default_factory=dict)


class KeysRepository:
    """Read-only credential lookup; never mutates external state."""

    def get_resolution(self, provider: str, explicit: Optional[str] = None) -> KeyResolution:
        p = (provider or "").lower().strip()
        if explicit and not is_placeholder(explicit):
            return KeyResolution(provider=p, api_key=explicit, source="option")

        cfg_key = get_provider_config(p).get("api_key")
        if isinstance(cfg_key, str) and cfg_key.strip() and not is_placeholder(cfg_key):
            return KeyResolution(provider=p, api_key=cfg_key.strip(), source="config")

        val, used = resolve_provider_key(p)
        if val:
            return KeyResolution(provider=p, api_key=val, source="env", extra={"env_var": used})
        return KeyResolution(provider=p, api_key=None, source="none")

    def get_api_key(self, provider: str, explicit: Optional[str] = None) -> Optional[str]:
        return self.get_resolution(provider, explicit).api_key


def resolve_secret(model: Model, options: Optional[RequestOptions] = None, repo: Optional[KeysRepository] = None) -> str:
    """Return the credential for ``model``'s provider.

    Raises:
        InvalidParameter: When no credential can be found.
    """
    explicit = options.api_key if options is not None else None
    key = (repo or KeysRepository()).get_api_key(model.provider, explicit)
    if not key:
        raise InvalidParameter(
            parameter=f"api_key: {MISSING_API_KEY_ERROR} for provider '{model.provider}'",
            provider=model.provider,
            model=model.model,
        )
    return key


__all__ = ["KeyResolution", "KeysRepository", "resolve_secret"]
