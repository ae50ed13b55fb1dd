"""Typed failures raised by the wallet REST adapter.

Use cases never see ``requests`` exceptions; they receive one of the classes
below and map them through ``zsend.usecases.error_mapping``.
"""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for wallet REST adapter failures."""

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
    """HTTP 4xx from the wallet bridge (rejected inputs, auth)."""


class ApiServerError(ApiError):
    """HTTP 5xx from the wallet bridge (node or broadcast failure)."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or unreachable node."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of an error body without raising."""
    try:
        return resp.json()
    except Exception:
        text = getattr(resp, "text", "") or ""
        return text[:400] or None


def error_detail(payload: Any) -> Optional[str]:
    """Return the first human-readable message found in an error body."""
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, dict):
        for key in ("error", "message", "detail", "reason"):
            value = payload.get(key)
            found = error_detail(value)
            if found:
                return found
    if isinstance(payload, list):
        for item in payload:
            found = error_detail(item)
            if found:
                return found
    return None


def error_code(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        value = payload.get("code")
        if value is not None:
            return str(value)
    return None


def raise_for_response(resp: Any, ctx: str) -> None:
    """Raise the typed ``ApiError`` matching a non-2xx response."""
    status = int(resp.status_code)
    if 200 <= status < 300:
        return
    payload = parse_error_payload(resp)
    detail = error_detail(payload)
    message = f"{ctx}: {detail} (HTTP {status})" if detail else f"{ctx}: HTTP {status}"
    if 400 <= status < 500:
        raise ApiClientError(
            message,
            status=status,
            code=error_code(payload),
            hint=detail,
            payload=payload,
            context=ctx,
        )
    if 500 <= status < 600:
        raise ApiServerError(message, status=status, hint=detail, payload=payload, context=ctx)
    raise ApiError(message, status=status, payload=payload, context=ctx)


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "error_code",
    "error_detail",
    "parse_error_payload",
    "raise_for_response",
]
