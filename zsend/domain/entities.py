from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from .addresses import AddressCategory, classify


@dataclass(frozen=True)
class Balance:
    """Wallet balance snapshot as reported by the backend."""

    spendable: Decimal = Decimal(0)
    """Funds available for immediate outgoing transactions."""
    unconfirmed: Decimal = Decimal(0)
    """Incoming funds still waiting for confirmations."""


@dataclass(frozen=True)
class TransactionDraft:
    """Field values currently entered on the send form."""

    address: str = ""
    amount: str = ""
    memo: str = ""

    @property
    def category(self) -> AddressCategory:
        return classify(self.address)


@dataclass(frozen=True)
class TransferRequest:
    """Payload frozen at dispatch time and handed to the wallet backend."""

    to_address: str
    amount: Decimal
    memo: Optional[str] = None


@dataclass(frozen=True)
class ConfirmationSummary:
    """Values shown to the user before they commit to sending."""

    to_address: str
    amount: Decimal
    fee: Decimal
    total: Decimal
    memo: Optional[str] = None
    fiat_amount: Optional[Decimal] = None
    currency_code: Optional[str] = None


@dataclass(frozen=True)
class SubmissionSucceeded:
    transaction_id: str


@dataclass(frozen=True)
class SubmissionFailed:
    message: str
    code: str = "SEND_FAILED"


SubmissionOutcome = Union[SubmissionSucceeded, SubmissionFailed]


class SubmissionPhase(str, Enum):
    """Lifecycle of one send attempt on a form."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


__all__ = [
    "Balance",
    "ConfirmationSummary",
    "SubmissionFailed",
    "SubmissionOutcome",
    "SubmissionPhase",
    "SubmissionSucceeded",
    "TransactionDraft",
    "TransferRequest",
]
