"""Domain package exports for value objects and pure rules."""

from .addresses import AddressCategory, classify, memo_permitted
from .amounts import AmountRequest, max_sendable, validate
from .entities import (
    Balance,
    ConfirmationSummary,
    SubmissionFailed,
    SubmissionOutcome,
    SubmissionPhase,
    SubmissionSucceeded,
    TransactionDraft,
    TransferRequest,
)
from .errors import ValidationError
from .payment_uri import PaymentRequest, parse_payment_uri
from .validation import MAX_MEMO_LENGTH, validate_draft

__all__ = [
    "AddressCategory",
    "AmountRequest",
    "Balance",
    "ConfirmationSummary",
    "MAX_MEMO_LENGTH",
    "PaymentRequest",
    "SubmissionFailed",
    "SubmissionOutcome",
    "SubmissionPhase",
    "SubmissionSucceeded",
    "TransactionDraft",
    "TransferRequest",
    "ValidationError",
    "classify",
    "max_sendable",
    "memo_permitted",
    "parse_payment_uri",
    "validate",
    "validate_draft",
]
