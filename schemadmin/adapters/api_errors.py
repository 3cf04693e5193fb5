"""Typed failures raised by the collection adapters.

Parse-style servers answer errors with ``{"code": <int>, "error": <text>}``;
other gateways in front of them may send ``message``/``detail`` or plain text.
"""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for collection API adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the collection API."""


class ApiServerError(ApiError):
    """HTTP 5xx from the collection API."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


_MESSAGE_KEYS = ("error", "message", "detail", "title")
_HINT_KEYS = ("hint", "details", "errors")


def raise_for_status(resp: Any, ctx: str) -> None:
    """Raise the typed error matching a non-2xx response; 2xx is a no-op."""
    status = int(getattr(resp, "status_code", 0) or 0)
    if 200 <= status < 300:
        return
    payload = parse_error_payload(resp)
    detail = first_string(payload)
    message = f"{ctx}: {detail} (HTTP {status})" if detail else f"{ctx}: HTTP {status}"
    if status >= 500 or status < 400:
        raise ApiServerError(message, status=status, payload=payload, context=ctx)
    raise ApiClientError(
        message,
        status=status,
        code=extract_error_code(payload),
        hint=extract_error_hint(payload),
        payload=payload,
        context=ctx,
    )


def parse_error_payload(resp: Any) -> Any:
    """JSON body when there is one, else up to 400 characters of text."""
    try:
        return resp.json()
    except ValueError:
        return (getattr(resp, "text", "") or "")[:400] or None


def extract_error_code(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    code = payload.get("code", payload.get("error_code"))
    return None if code is None else str(code)


def extract_error_hint(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload.strip()[:200] or None
    if not isinstance(payload, dict):
        return None
    for key in _HINT_KEYS:
        value = payload.get(key)
        if isinstance(value, list):
            value = "; ".join(str(item).strip() for item in value[:3] if str(item).strip())
        if isinstance(value, str) and value.strip():
            return value.strip()[:200]
    return None


def first_string(payload: Any) -> Optional[str]:
    """First human-readable message found in an error payload."""
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, dict):
        candidates = [payload.get(key) for key in _MESSAGE_KEYS]
    elif isinstance(payload, list):
        candidates = payload
    else:
        return None
    for candidate in candidates:
        text = first_string(candidate)
        if text:
            return text
    return None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "extract_error_code",
    "extract_error_hint",
    "first_string",
    "parse_error_payload",
    "raise_for_status",
]
