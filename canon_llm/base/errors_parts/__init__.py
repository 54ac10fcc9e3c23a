"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `canon_llm.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .invalid_parameter import InvalidParameter
from .invalid_provider import InvalidProvider
from .api_response_error import APIResponseError
from .api_stream_error import APIStreamError
from .chunk_validation_error import ChunkValidationError
from .classification import classify_exception, translate_exception, translate_http_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "InvalidParameter",
    "InvalidProvider",
    "APIResponseError",
    "APIStreamError",
    "ChunkValidationError",
    "classify_exception",
    "translate_exception",
    "translate_http_error",
]
