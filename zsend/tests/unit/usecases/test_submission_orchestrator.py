from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import List, Optional

from zsend.adapters.api_errors import ApiTimeoutError
from zsend.adapters.wallet_mock import WalletMock
from zsend.domain.entities import (
    Balance,
    SubmissionFailed,
    SubmissionPhase,
    SubmissionSucceeded,
    TransactionDraft,
)
from zsend.usecases.submission_orchestrator import SubmissionHooks, SubmissionOrchestrator
from zsend.usecases.submit_transaction import SubmitTransaction
from zsend.viewmodels.send_vm import SendVM

T_ADDR = "t1abcdefghijklmnopqrstuvwxyz012345"
Z_ADDR = "zs" + "a" * 58


def _make(
    wallet: Optional[WalletMock] = None,
    *,
    hooks: Optional[SubmissionHooks] = None,
    spendable: str = "10",
):
    wallet = wallet or WalletMock(txid="tx-1")
    vm = SendVM(fee=Decimal("0.001"), balance=Balance(spendable=Decimal(spendable)))
    orchestrator = SubmissionOrchestrator(vm, SubmitTransaction(wallet), hooks=hooks)
    return vm, orchestrator, wallet


def _fill(vm: SendVM, address: str = T_ADDR, amount: str = "1", memo: str = "") -> None:
    vm.set_address(address)
    vm.set_amount(amount)
    vm.set_memo(memo)


def test_successful_submit_surfaces_txid_then_resets_on_acknowledge() -> None:
    vm, orchestrator, wallet = _make()
    _fill(vm)

    outcome = asyncio.run(orchestrator.submit())

    assert outcome == SubmissionSucceeded(transaction_id="tx-1")
    assert vm.phase is SubmissionPhase.SUCCEEDED
    assert vm.in_flight is False
    assert vm.last_error is None
    assert vm.last_transaction_id == "tx-1"
    assert vm.draft.address == T_ADDR
    assert len(wallet.sent) == 1
    assert wallet.sent[0].amount == Decimal("1")
    assert wallet.sent[0].memo is None

    orchestrator.acknowledge()

    assert vm.draft == TransactionDraft()
    assert vm.phase is SubmissionPhase.IDLE
    assert vm.last_transaction_id is None


def test_network_failure_keeps_draft_and_sets_error() -> None:
    wallet = WalletMock(fail_with=ApiTimeoutError("timeout", context="POST /send"))
    vm, orchestrator, _ = _make(wallet)
    _fill(vm, amount="2.5")
    draft_before = vm.draft

    outcome = asyncio.run(orchestrator.submit())

    assert isinstance(outcome, SubmissionFailed)
    assert outcome.code == "REQUEST_TIMEOUT"
    assert vm.phase is SubmissionPhase.FAILED
    assert vm.last_error == "Request timed out. Check connection."
    assert vm.in_flight is False
    assert vm.draft == draft_before


def test_retry_after_failure_is_accepted() -> None:
    wallet = WalletMock(fail_with=RuntimeError("node unreachable"), txid="tx-2")
    vm, orchestrator, _ = _make(wallet)
    _fill(vm)

    first = asyncio.run(orchestrator.submit())
    wallet.fail_with = None
    second = asyncio.run(orchestrator.submit())

    assert isinstance(first, SubmissionFailed)
    assert second == SubmissionSucceeded(transaction_id="tx-2")
    assert len(wallet.sent) == 2


def test_second_submit_while_pending_is_ignored() -> None:
    vm, orchestrator, wallet = _make()
    _fill(vm)

    async def scenario():
        wallet.gate = asyncio.Event()
        first = asyncio.create_task(orchestrator.submit())
        await asyncio.sleep(0)
        assert vm.in_flight is True
        assert vm.phase is SubmissionPhase.SUBMITTING
        second = await orchestrator.submit()
        wallet.gate.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert first == SubmissionSucceeded(transaction_id="tx-1")
    assert second is None
    assert len(wallet.sent) == 1


def test_rapid_gathered_submits_call_backend_once() -> None:
    vm, orchestrator, wallet = _make()
    _fill(vm)

    async def scenario():
        return await asyncio.gather(orchestrator.submit(), orchestrator.submit())

    results = asyncio.run(scenario())

    assert results.count(None) == 1
    assert len(wallet.sent) == 1


def test_invalid_draft_is_never_dispatched() -> None:
    vm, orchestrator, wallet = _make()
    _fill(vm, address="not-an-address", amount="0")

    outcome = asyncio.run(orchestrator.submit())

    assert outcome is None
    assert wallet.sent == []
    assert vm.phase is SubmissionPhase.IDLE
    assert vm.in_flight is False


def test_unaffordable_draft_is_never_dispatched() -> None:
    vm, orchestrator, wallet = _make(spendable="10")
    _fill(vm, amount="9.9999")

    assert asyncio.run(orchestrator.submit()) is None
    assert wallet.sent == []


def test_submit_ignored_until_success_is_acknowledged() -> None:
    vm, orchestrator, wallet = _make()
    _fill(vm)
    asyncio.run(orchestrator.submit())

    assert asyncio.run(orchestrator.submit()) is None
    assert len(wallet.sent) == 1


def test_edit_after_failure_clears_error() -> None:
    vm, orchestrator, _ = _make(WalletMock(fail_with=RuntimeError("boom")))
    _fill(vm)
    asyncio.run(orchestrator.submit())
    assert vm.last_error == "Transaction failed. Please try again later"

    vm.set_amount("1.5")

    assert vm.last_error is None
    assert vm.phase is SubmissionPhase.IDLE


def test_backend_wording_maps_to_friendly_message() -> None:
    vm, orchestrator, _ = _make(WalletMock(fail_with=RuntimeError("Insufficient funds in note pool")))
    _fill(vm)

    outcome = asyncio.run(orchestrator.submit())

    assert outcome == SubmissionFailed(
        message="Insufficient balance to complete this transaction",
        code="INSUFFICIENT_FUNDS",
    )


def test_empty_transaction_id_is_a_failure() -> None:
    vm, orchestrator, _ = _make(WalletMock(txid="  "))
    _fill(vm)

    outcome = asyncio.run(orchestrator.submit())

    assert isinstance(outcome, SubmissionFailed)
    assert outcome.code == "EMPTY_TXID"
    assert vm.draft.address == T_ADDR


def test_result_dropped_when_form_disposed_mid_flight() -> None:
    vm, orchestrator, wallet = _make()
    _fill(vm)

    async def scenario():
        wallet.gate = asyncio.Event()
        task = asyncio.create_task(orchestrator.submit())
        await asyncio.sleep(0)
        vm.dispose()
        wallet.gate.set()
        return await task

    outcome = asyncio.run(scenario())

    assert outcome == SubmissionSucceeded(transaction_id="tx-1")
    assert vm.phase is SubmissionPhase.SUBMITTING
    assert vm.last_transaction_id is None
    assert asyncio.run(orchestrator.submit()) is None


def test_shielded_memo_is_sent() -> None:
    vm, orchestrator, wallet = _make()
    _fill(vm, address=Z_ADDR, memo="  lunch  ")

    asyncio.run(orchestrator.submit())

    assert wallet.sent[0].memo == "lunch"


def test_hooks_follow_phases() -> None:
    phases: List[SubmissionPhase] = []
    sent: List[str] = []
    hooks = SubmissionHooks(on_phase=phases.append, on_succeeded=sent.append)
    vm, orchestrator, _ = _make(hooks=hooks)
    _fill(vm)

    asyncio.run(orchestrator.submit())

    assert phases == [
        SubmissionPhase.VALIDATING,
        SubmissionPhase.SUBMITTING,
        SubmissionPhase.SUCCEEDED,
    ]
    assert sent == ["tx-1"]


def test_failure_hook_receives_message() -> None:
    errors: List[str] = []
    vm, orchestrator, _ = _make(
        WalletMock(fail_with=RuntimeError("invalid address checksum")),
        hooks=SubmissionHooks(on_failed=errors.append),
    )
    _fill(vm)

    asyncio.run(orchestrator.submit())

    assert errors == ["Invalid address format. Please check and try again"]


def test_confirmation_summary() -> None:
    vm, orchestrator, _ = _make()
    _fill(vm, address=Z_ADDR, amount="2", memo="hi")

    summary = orchestrator.confirmation()

    assert summary is not None
    assert summary.to_address == Z_ADDR
    assert summary.amount == Decimal("2")
    assert summary.fee == Decimal("0.001")
    assert summary.total == Decimal("2.001")
    assert summary.memo == "hi"
    assert summary.fiat_amount is None


def test_confirmation_unavailable_for_invalid_draft() -> None:
    vm, orchestrator, _ = _make()
    _fill(vm, amount="")

    assert orchestrator.confirmation() is None
