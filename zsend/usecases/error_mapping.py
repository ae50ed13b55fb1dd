"""Translate wallet adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from zsend.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
)
from zsend.domain.ports import UseCaseError

INSUFFICIENT_FUNDS_MESSAGE = "Insufficient balance to complete this transaction"
INVALID_ADDRESS_MESSAGE = "Invalid address format. Please check and try again"
SEND_FAILED_MESSAGE = "Transaction failed. Please try again later"


def map_wallet_error(
    exc: Exception,
    *,
    default_code: str = "SEND_FAILED",
    default_message: Optional[str] = SEND_FAILED_MESSAGE,
) -> UseCaseError:
    """Map adapter or backend exceptions to stable UseCaseError codes.

    Backend rejections are recognised by their wording because the wallet
    node reports them as free text.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError) and exc.status in (401, 403):
        return UseCaseError("AUTH_FAILED", "Auth failed / API key invalid.")

    text = _error_text(exc).lower()
    if "insufficient" in text:
        return UseCaseError("INSUFFICIENT_FUNDS", INSUFFICIENT_FUNDS_MESSAGE)
    if "invalid" in text and "address" in text:
        return UseCaseError("INVALID_ADDRESS", INVALID_ADDRESS_MESSAGE)

    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Wallet node error, try again.")
    if isinstance(exc, ApiClientError):
        hint = (exc.hint or "").strip()
        message = f"Request rejected: {hint}" if hint else "Request rejected."
        return UseCaseError("REQUEST_FAILED", message)

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _error_text(exc: Exception) -> str:
    if isinstance(exc, ApiError) and exc.hint:
        return f"{exc.hint} {exc}"
    return str(exc)


__all__ = [
    "INSUFFICIENT_FUNDS_MESSAGE",
    "INVALID_ADDRESS_MESSAGE",
    "SEND_FAILED_MESSAGE",
    "map_wallet_error",
]
