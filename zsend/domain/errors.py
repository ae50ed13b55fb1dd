"""Domain-level error types for use-case and adapter mapping.

Input errors are returned as :class:`ValidationError` codes rather than raised,
so the send form can show them inline next to the offending field.
"""

from __future__ import annotations

from enum import Enum


class ValidationError(str, Enum):
    """Synchronous input error detected on a draft field."""

    EMPTY_AMOUNT = "EMPTY_AMOUNT"
    NOT_A_NUMBER = "NOT_A_NUMBER"
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    MEMO_TOO_LONG = "MEMO_TOO_LONG"


class InvalidAmount(ValueError):
    """Raised by amount parsing helpers; ``code`` names the failed rule."""

    def __init__(self, code: ValidationError, message: str) -> None:
        super().__init__(message)
        self.code = code


__all__ = ["InvalidAmount", "ValidationError"]
