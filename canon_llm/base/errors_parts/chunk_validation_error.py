"""Error value for a malformed stream chunk or an inconsistent chunk sequence."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class ChunkValidationError(ProviderError):
    """``reason`` names the violated rule, e.g. ``"Content chunks must have non-nil text"``."""

    reason: str = ""
    code: ErrorCode = field(default=ErrorCode.INTEGRITY)
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.reason


__all__ = ["ChunkValidationError"]
