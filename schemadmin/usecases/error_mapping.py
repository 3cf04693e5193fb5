"""Translate adapter errors into user-facing UseCaseError instances.

Parse-style servers report many failures as HTTP 400 with a numeric ``code``
in the body, so the body code is consulted before the HTTP status.
"""

from __future__ import annotations

from typing import Dict, Optional

from schemadmin.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    extract_error_hint,
    first_string,
)
from schemadmin.domain.ports import UseCaseError

AUTH_MESSAGE = "Not authorized. Please sign in again."

# Parse error codes: 101 object not found, 119 operation forbidden, 209 invalid session token.
_PARSE_CODES: Dict[str, str] = {"101": "NOT_FOUND", "119": "AUTH_FAILED", "209": "AUTH_FAILED"}

_CLIENT_STATUS: Dict[int, str] = {
    400: "INVALID_PARAMS",
    401: "AUTH_FAILED",
    403: "AUTH_FAILED",
    404: "NOT_FOUND",
    422: "INVALID_PARAMS",
}

_BASE_MESSAGES = {"NOT_FOUND": "Object not found", "INVALID_PARAMS": "Invalid request"}


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by a port call.
        default_code: Code used for anything that is not an ``ApiError``.
        default_message: Message used when ``exc`` carries no text.

    Returns:
        UseCaseError: Error the presenters can surface as-is.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        return _map_client_error(exc)
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Server error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))
    return UseCaseError(default_code, default_message or str(exc) or "Unexpected error.")


def _map_client_error(exc: ApiClientError) -> UseCaseError:
    status = exc.status or 0
    detail = first_string(exc.payload) or exc.hint or extract_error_hint(exc.payload)
    code = _PARSE_CODES.get(str(exc.code)) if exc.code is not None else None
    if code is None and status in _CLIENT_STATUS:
        code = _CLIENT_STATUS[status]
    if code == "AUTH_FAILED":
        return UseCaseError(code, AUTH_MESSAGE)
    if code is not None:
        return UseCaseError(code, _with_detail(_BASE_MESSAGES[code], detail))
    label = f"Request failed (HTTP {status})" if status else "Request failed"
    return UseCaseError("REQUEST_FAILED", _with_detail(label, detail))


def _with_detail(base: str, detail: Optional[str]) -> str:
    text = (detail or "").strip()
    if text:
        return f"{base}: {text}"
    return base if base.endswith(".") else f"{base}."


__all__ = ["AUTH_MESSAGE", "map_api_error"]
