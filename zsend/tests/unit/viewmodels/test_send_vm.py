from __future__ import annotations

from decimal import Decimal

import pytest

from zsend.domain.addresses import AddressCategory
from zsend.domain.entities import Balance, SubmissionPhase, TransferRequest
from zsend.domain.errors import ValidationError
from zsend.viewmodels.send_vm import SendVM

T_ADDR = "t1abcdefghijklmnopqrstuvwxyz012345"
Z_ADDR = "zs" + "a" * 58


def _vm(spendable: str = "10") -> SendVM:
    return SendVM(fee=Decimal("0.001"), balance=Balance(spendable=Decimal(spendable)))


def test_empty_form_reports_inline_errors() -> None:
    vm = _vm()

    assert vm.is_valid is False
    assert vm.can_submit is False
    assert vm.field_messages == {
        "address": "Invalid BitcoinZ address",
        "amount": "Amount is required",
    }


def test_valid_transparent_send() -> None:
    vm = _vm()
    vm.set_address(f"  {T_ADDR}  ")
    vm.set_amount("5")

    assert vm.category is AddressCategory.TRANSPARENT
    assert vm.memo_enabled is False
    assert vm.can_submit is True
    assert vm.transfer_request() == TransferRequest(to_address=T_ADDR, amount=Decimal("5"))


def test_memo_enabled_only_for_shielded_recipient() -> None:
    vm = _vm()
    vm.set_address(Z_ADDR)
    vm.set_amount("1")
    vm.set_memo("hi")

    assert vm.memo_enabled is True
    assert vm.effective_memo == "hi"

    vm.set_address(T_ADDR)

    assert vm.memo_enabled is False
    assert vm.effective_memo is None
    assert vm.transfer_request().memo is None


def test_long_memo_blocks_shielded_send() -> None:
    vm = _vm()
    vm.set_address(Z_ADDR)
    vm.set_amount("1")
    vm.set_memo("m" * 513)

    assert vm.field_errors == {"memo": ValidationError.MEMO_TOO_LONG}
    assert vm.field_messages["memo"] == "Memo must be at most 512 characters"
    assert vm.transfer_request() is None


def test_amount_plus_fee_over_balance_is_rejected() -> None:
    vm = _vm("10")
    vm.set_address(T_ADDR)
    vm.set_amount("9.9995")

    assert vm.field_errors == {"amount": ValidationError.INSUFFICIENT_BALANCE}

    vm.set_amount("9.999")

    assert vm.is_valid is True


def test_fill_max_uses_balance_minus_fee() -> None:
    vm = _vm("10")

    assert vm.fill_max() is True
    assert vm.draft.amount == "9.99900000"


def test_fill_max_with_balance_below_fee() -> None:
    vm = _vm("0.0005")

    assert vm.fill_max() is False
    assert vm.draft.amount == ""


def test_fiat_mode_converts_amount_text() -> None:
    vm = _vm()
    vm.set_address(T_ADDR)
    vm.set_amount("4")
    vm.set_fiat_rate(Decimal("0.5"), "usd")

    vm.set_fiat_input(True)

    assert vm.currency_code == "USD"
    assert vm.draft.amount == "2.00"
    assert vm.coin_amount() == Decimal("4")
    assert vm.fiat_amount() == Decimal("2.00")
    assert vm.transfer_request().amount == Decimal("4")

    vm.set_fiat_input(False)

    assert vm.draft.amount == "4.00000000"


def test_fill_max_in_fiat_mode_stays_affordable() -> None:
    vm = _vm("10")
    vm.set_address(T_ADDR)
    vm.set_fiat_rate(Decimal("0.5"), "USD")
    vm.set_fiat_input(True)

    vm.fill_max()

    assert vm.draft.amount == "4.99"
    assert vm.is_valid is True


def test_fiat_input_requires_price() -> None:
    vm = _vm()

    with pytest.raises(ValueError):
        vm.set_fiat_input(True)


def test_clearing_price_leaves_fiat_mode() -> None:
    vm = _vm()
    vm.set_fiat_rate(Decimal("2"), "EUR")
    vm.set_fiat_input(True)

    vm.set_fiat_rate(None)

    assert vm.fiat_input is False
    assert vm.fiat_price is None
    assert vm.fiat_amount() is None


def test_scanned_payment_uri_fills_draft() -> None:
    vm = _vm()
    vm.set_fiat_rate(Decimal("2"), "EUR")
    vm.set_fiat_input(True)

    ok = vm.apply_scanned_text(f"bitcoinz:{Z_ADDR}?amount=1.5&memo=thanks%20for%20lunch&label=Bob")

    assert ok is True
    assert vm.fiat_input is False
    assert vm.draft.address == Z_ADDR
    assert vm.draft.amount == "1.5"
    assert vm.draft.memo == "thanks for lunch"
    assert vm.recipient_label == "Bob"


def test_scanned_bare_address() -> None:
    vm = _vm()

    assert vm.apply_scanned_text(T_ADDR) is True
    assert vm.draft.address == T_ADDR
    assert vm.apply_scanned_text("hello") is False


def test_status_text_follows_phase() -> None:
    vm = _vm()
    vm.phase = SubmissionPhase.SUBMITTING

    assert vm.status_text == "Broadcasting transaction..."
    assert vm.progress == 0.5


def test_edits_notify_until_disposed() -> None:
    calls = []
    vm = SendVM(on_change=lambda: calls.append(1))

    vm.set_address(T_ADDR)
    vm.set_amount("1")
    vm.dispose()
    vm.set_memo("x")

    assert len(calls) == 2
    assert vm.can_submit is False


def test_edit_does_not_clear_error_while_submitting() -> None:
    vm = _vm()
    vm.phase = SubmissionPhase.SUBMITTING
    vm.last_error = "stale"

    vm.set_amount("2")

    assert vm.phase is SubmissionPhase.SUBMITTING
    assert vm.last_error == "stale"


def test_huge_fiat_amount_is_reported_inline() -> None:
    vm = _vm("10")
    vm.set_address(T_ADDR)
    vm.set_fiat_rate(Decimal("0.5"), "USD")
    vm.set_fiat_input(True)

    vm.set_amount("123456789012345678901")

    assert vm.field_errors == {"amount": ValidationError.INSUFFICIENT_BALANCE}
    assert vm.can_submit is False

    vm.set_fiat_input(False)

    assert vm.draft.amount == "246913578024691357802.00000000"


def test_shielded_memo_with_trailing_spaces_at_limit_is_sendable() -> None:
    vm = _vm()
    vm.set_address(Z_ADDR)
    vm.set_amount("1")
    vm.set_memo("m" * 512 + "  ")

    assert vm.is_valid is True
    assert len(vm.transfer_request().memo) == 512
