"""
Error classification helpers.

Maps HTTP statuses and foreign exceptions (httpx transport faults, timeouts,
vendor error bodies) onto the canonical taxonomy. Status mapping takes
precedence; substring heuristics on the message are the fallback for
exceptions that carry no status.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from .api_response_error import APIResponseError
from .error_code import ErrorCode
from .provider_error import ProviderError


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_RETRYABLE = {ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.TRANSIENT, ErrorCode.UNAVAILABLE}

_PATTERN_GROUPS = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden")),
    (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in _PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def code_for_status(status: Optional[int]) -> ErrorCode:
    """Return the normalized code for an HTTP status (``UNKNOWN`` when unmapped)."""
    if status is None:
        return ErrorCode.UNKNOWN
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (builtin and httpx).
        3. HTTP status mapping.
        4. Substring heuristics.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def _vendor_message(body: Any) -> Optional[str]:
    """Pull the human message out of a vendor error body.

    Both OpenAI and Anthropic wrap failures as ``{"error": {"message": ...}}``;
    some gateways return ``{"error": "text"}`` or ``{"message": ...}``.
    """
    if not isinstance(body, Mapping):
        return body if isinstance(body, str) and body else None
    err = body.get("error")
    if isinstance(err, Mapping):
        msg = err.get("message")
        if isinstance(msg, str):
            return msg
    if isinstance(err, str):
        return err
    msg = body.get("message")
    return msg if isinstance(msg, str) else None


def translate_http_error(
    status: Optional[int],
    body: Any,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    reason: Optional[str] = None,
) -> APIResponseError:
    """Build the canonical :class:`APIResponseError` for a failed vendor response.

    The returned error is a value; callers decide whether to raise it.
    """
    code = code_for_status(status)
    detail = _vendor_message(body)
    prefix = reason or f"{provider or 'provider'} API error"
    message = f"{prefix}: {detail}" if detail else prefix
    return APIResponseError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=code in _RETRYABLE,
        status=status,
        body=body,
    )


def translate_exception(
    exc: BaseException,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> ProviderError:
    """Wrap an arbitrary transport exception into the taxonomy.

    Canonical errors pass through unchanged.
    """
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=code in _RETRYABLE,
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "code_for_status",
    "translate_http_error",
    "translate_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
