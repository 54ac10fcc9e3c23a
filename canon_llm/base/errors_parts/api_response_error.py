"""Error value describing a non-success vendor HTTP response."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class APIResponseError(ProviderError):
    """Vendor answered with a non-2xx status.

    Attributes:
        status: HTTP status code returned by the vendor.
        body: Parsed response body (mapping) or raw text when not JSON.
    """

    code: ErrorCode = field(default=ErrorCode.UNKNOWN)
    message: str = ""
    status: Optional[int] = None
    body: Any = None


__all__ = ["APIResponseError"]
