"""Construction-time error for a bad argument, option or model reference."""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class InvalidParameter(ProviderError):
    """Raised before any I/O when a request cannot be built.

    ``parameter`` is the human-readable description, for example
    ``"model: gpt-nope"`` or ``"operation: embedding not supported"``.
    """

    parameter: str = ""
    code: ErrorCode = field(default=ErrorCode.VALIDATION)
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.parameter


__all__ = ["InvalidParameter"]
