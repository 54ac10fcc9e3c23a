"""Canonical error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``canon_llm.base.errors_parts`` to keep a stable import path.

Kinds
-----
- ``InvalidParameter``: bad option, model or unsupported operation; raised
  before any I/O.
- ``InvalidProvider``: unknown provider tag or provider/model mismatch;
  raised before any I/O.
- ``APIResponseError``: non-success vendor response; returned as a value.
- ``APIStreamError``: fault while pulling a chunk sequence.
- ``ChunkValidationError``: malformed chunk or inconsistent sequence.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.invalid_parameter import InvalidParameter
from .errors_parts.invalid_provider import InvalidProvider
from .errors_parts.api_response_error import APIResponseError
from .errors_parts.api_stream_error import APIStreamError
from .errors_parts.chunk_validation_error import ChunkValidationError
from .errors_parts.classification import (
    classify_exception,
    code_for_status,
    translate_exception,
    translate_http_error,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "InvalidParameter",
    "InvalidProvider",
    "APIResponseError",
    "APIStreamError",
    "ChunkValidationError",
    "classify_exception",
    "code_for_status",
    "translate_exception",
    "translate_http_error",
]
