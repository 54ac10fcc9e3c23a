"""Interface contracts public surface.

Re-exports the Protocols under ``canon_llm.base.interfaces_parts``.
"""

from .interfaces_parts.provider_codec import ProviderCodec
from .interfaces_parts.transport import Transport

__all__ = ["ProviderCodec", "Transport"]
