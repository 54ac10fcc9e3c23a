"""Error raised from a chunk sequence when a stream event cannot be decoded."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class APIStreamError(ProviderError):
    """Mid-stream fault.

    ``cause`` keeps the underlying exception; chunks yielded before the fault
    remain valid.
    """

    code: ErrorCode = field(default=ErrorCode.STREAM)
    message: str = ""
    cause: Optional[BaseException] = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = f"stream failed: {self.cause!r}" if self.cause is not None else "stream failed"
        if self.raw is None:
            self.raw = self.cause


__all__ = ["APIStreamError"]
