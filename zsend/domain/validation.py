"""Draft-level validation combining address, amount and memo rules."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from . import amounts
from .addresses import AddressCategory
from .entities import TransactionDraft
from .errors import ValidationError

MAX_MEMO_LENGTH = 512

FieldErrors = Dict[str, ValidationError]


def validate_draft(
    draft: TransactionDraft,
    *,
    amount: amounts.AmountInput,
    fee: Decimal,
    spendable: Decimal,
) -> FieldErrors:
    """Return per-field errors for ``draft``; an empty mapping means sendable.

    ``amount`` is passed separately because the form may hold fiat text that
    has already been converted to coin units by the caller.
    """
    errors: FieldErrors = {}
    if draft.category is AddressCategory.INVALID:
        errors["address"] = ValidationError.INVALID_ADDRESS

    amount_error = amounts.validate(
        amounts.AmountRequest(amount=amount, fee=fee, spendable=spendable)
    )
    if amount_error is not None:
        errors["amount"] = amount_error

    # Memo is ignored (and not checked) unless the recipient is shielded.
    # Surrounding whitespace is stripped before sending, so it does not count.
    if draft.category is AddressCategory.SHIELDED and len(draft.memo.strip()) > MAX_MEMO_LENGTH:
        errors["memo"] = ValidationError.MEMO_TOO_LONG
    return errors


__all__ = ["FieldErrors", "MAX_MEMO_LENGTH", "validate_draft"]
