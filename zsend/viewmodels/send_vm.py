"""Send-form view model.

Holds the single ``TransactionDraft`` of a send screen together with the
submission status fields that ``SubmissionOrchestrator`` writes back. Address
category, memo visibility and validity are derived from the draft on every
read and never stored.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import ROUND_DOWN, Decimal
from typing import Callable, Dict, Optional

from zsend.domain import amounts
from zsend.domain.addresses import AddressCategory, is_valid_address
from zsend.domain.amounts import AmountInput
from zsend.domain.entities import (
    Balance,
    SubmissionPhase,
    TransactionDraft,
    TransferRequest,
)
from zsend.domain.errors import InvalidAmount
from zsend.domain.payment_uri import parse_payment_uri
from zsend.domain.validation import FieldErrors, validate_draft

from .status_format import field_error_message, phase_label, phase_progress

DEFAULT_FEE = Decimal("0.001")

_EDITABLE_PHASES = (SubmissionPhase.IDLE, SubmissionPhase.FAILED)


class SendVM:
    """Keeps send-form UI state and validation, no I/O here."""

    def __init__(
        self,
        *,
        fee: Decimal = DEFAULT_FEE,
        balance: Optional[Balance] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.fee: Decimal = amounts.to_decimal(fee)
        self.balance: Balance = balance or Balance()
        self.on_change = on_change
        self._log = logging.getLogger(__name__)

        self.draft = TransactionDraft()
        self.recipient_label: Optional[str] = None
        self.fiat_input: bool = False
        self.fiat_price: Optional[Decimal] = None
        self.currency_code: Optional[str] = None

        self.phase: SubmissionPhase = SubmissionPhase.IDLE
        self.in_flight: bool = False
        self.last_error: Optional[str] = None
        self.last_transaction_id: Optional[str] = None
        self.disposed: bool = False

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------
    def set_address(self, text: Optional[str]) -> None:
        self.draft = replace(self.draft, address=(text or "").strip())
        self.recipient_label = None
        self._edited()

    def set_amount(self, text: Optional[str]) -> None:
        self.draft = replace(self.draft, amount=text or "")
        self._edited()

    def set_memo(self, text: Optional[str]) -> None:
        self.draft = replace(self.draft, memo=text or "")
        self._edited()

    def set_balance(self, balance: Balance) -> None:
        self.balance = balance
        self.notify()

    def set_fiat_rate(self, price: Optional[Decimal], currency_code: Optional[str] = None) -> None:
        """Update the coin price used by fiat input; ``None`` disables fiat mode."""
        if price is None or amounts.to_decimal(price) <= 0:
            self.fiat_price = None
            self.currency_code = None
            if self.fiat_input:
                self.fiat_input = False
                self._edited()
            return
        self.fiat_price = amounts.to_decimal(price)
        self.currency_code = (currency_code or "").strip().upper() or None
        self.notify()

    def set_fiat_input(self, enabled: bool) -> None:
        """Switch the amount field between coin and fiat, converting its text."""
        enabled = bool(enabled)
        if enabled == self.fiat_input:
            return
        if enabled and self.fiat_price is None:
            raise ValueError("Fiat input requires a known coin price.")
        converted = self._convert_amount_text(to_fiat=enabled)
        self.fiat_input = enabled
        if converted is not None:
            self.draft = replace(self.draft, amount=converted)
        self._edited()

    def fill_max(self) -> bool:
        """Put the largest affordable amount into the amount field."""
        maximum = amounts.max_sendable(self.fee, self.balance.spendable)
        if maximum <= 0:
            self._log.debug(
                "Send max skipped: spendable %s does not cover fee %s",
                self.balance.spendable,
                self.fee,
            )
            return False
        if self.fiat_input and self.fiat_price is not None:
            # fiat text must convert back to at most ``maximum``
            fiat = amounts.coin_to_fiat(maximum, self.fiat_price, rounding=ROUND_DOWN)
            text = f"{fiat:f}"
        else:
            text = amounts.format_coin(maximum)
        self.set_amount(text)
        return True

    def apply_scanned_text(self, text: Optional[str]) -> bool:
        """Fill the draft from a scanned QR payload or a shared payment link.

        Accepts a ``bitcoinz:`` payment URI or a bare address. Returns ``True``
        when the resulting address is valid.
        """
        request = parse_payment_uri(text or "")
        if request is None:
            self.set_address(text)
            return is_valid_address(self.draft.address)

        draft = replace(self.draft, address=request.address.strip())
        if request.amount is not None:
            # URI amounts are always denominated in coin units.
            self.fiat_input = False
            draft = replace(draft, amount=request.amount)
        if request.memo is not None:
            draft = replace(draft, memo=request.memo)
        self.draft = draft
        self.recipient_label = request.label
        self._edited()
        return is_valid_address(self.draft.address)

    def reset_draft(self) -> None:
        self.draft = TransactionDraft()
        self.recipient_label = None
        self.last_error = None
        self.notify()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def category(self) -> AddressCategory:
        return self.draft.category

    @property
    def memo_enabled(self) -> bool:
        return self.category is AddressCategory.SHIELDED

    @property
    def effective_memo(self) -> Optional[str]:
        """Memo that would be sent; dropped for non-shielded recipients."""
        if not self.memo_enabled:
            return None
        return self.draft.memo.strip() or None

    def coin_amount(self) -> AmountInput:
        """Amount in coin units, converting fiat text when fiat input is on.

        Unparseable text is returned unchanged so validation reports it.
        """
        if not self.fiat_input or self.fiat_price is None:
            return self.draft.amount
        try:
            fiat = amounts.parse_amount(self.draft.amount)
        except InvalidAmount:
            return self.draft.amount
        return amounts.fiat_to_coin(fiat, self.fiat_price)

    def fiat_amount(self) -> Optional[Decimal]:
        if self.fiat_price is None:
            return None
        try:
            value = amounts.parse_amount(self.draft.amount)
        except InvalidAmount:
            return None
        return value if self.fiat_input else amounts.coin_to_fiat(value, self.fiat_price)

    @property
    def field_errors(self) -> FieldErrors:
        return validate_draft(
            self.draft,
            amount=self.coin_amount(),
            fee=self.fee,
            spendable=self.balance.spendable,
        )

    @property
    def field_messages(self) -> Dict[str, str]:
        return {name: field_error_message(err) for name, err in self.field_errors.items()}

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    @property
    def can_submit(self) -> bool:
        return (
            not self.disposed
            and not self.in_flight
            and self.phase in _EDITABLE_PHASES
            and self.is_valid
        )

    @property
    def status_text(self) -> str:
        return phase_label(self.phase)

    @property
    def progress(self) -> float:
        return phase_progress(self.phase)

    def transfer_request(self) -> Optional[TransferRequest]:
        """Freeze the draft into a backend payload, or ``None`` if invalid."""
        if not self.is_valid:
            return None
        return TransferRequest(
            to_address=self.draft.address,
            amount=amounts.parse_amount(self.coin_amount()),
            memo=self.effective_memo,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def dispose(self) -> None:
        """Detach from the host view; late submission results are dropped."""
        self.disposed = True
        self.on_change = None

    def notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _edited(self) -> None:
        if self.phase in _EDITABLE_PHASES:
            self.last_error = None
            self.phase = SubmissionPhase.IDLE
        self.notify()

    def _convert_amount_text(self, *, to_fiat: bool) -> Optional[str]:
        if self.fiat_price is None:
            return None
        try:
            value = amounts.parse_amount(self.draft.amount)
        except InvalidAmount:
            return None
        if to_fiat:
            return f"{amounts.coin_to_fiat(value, self.fiat_price):f}"
        return amounts.format_coin(amounts.fiat_to_coin(value, self.fiat_price))


__all__ = ["DEFAULT_FEE", "SendVM"]
