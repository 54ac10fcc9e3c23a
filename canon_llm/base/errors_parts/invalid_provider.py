"""Construction-time error for an unknown or mismatched provider tag."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class InvalidProvider(ProviderError):
    """Raised when a provider tag is not registered or does not match the codec."""

    code: ErrorCode = field(default=ErrorCode.UNSUPPORTED)
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"invalid provider: {self.provider}"


__all__ = ["InvalidProvider"]
