from __future__ import annotations

"""Coordinator driving one send form through its submission lifecycle."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from zsend.domain import amounts
from zsend.domain.entities import (
    ConfirmationSummary,
    SubmissionFailed,
    SubmissionOutcome,
    SubmissionPhase,
    SubmissionSucceeded,
)
from zsend.domain.ports import UseCaseError

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from zsend.usecases.submit_transaction import SubmitTransaction
    from zsend.viewmodels.send_vm import SendVM

_ACCEPTING_PHASES = (SubmissionPhase.IDLE, SubmissionPhase.FAILED)


def _noop(*_: object, **__: object) -> None:
    """Default no-op callback used for hooks."""


@dataclass
class SubmissionHooks:
    """Optional callbacks for the host view (progress overlay, dialogs)."""

    on_phase: Callable[[SubmissionPhase], None] = _noop
    on_succeeded: Callable[[str], None] = _noop
    on_failed: Callable[[str], None] = _noop

    def __post_init__(self) -> None:
        self.on_phase = self.on_phase or _noop
        self.on_succeeded = self.on_succeeded or _noop
        self.on_failed = self.on_failed or _noop


class SubmissionOrchestrator:
    """Single-in-flight send workflow over a ``SendVM``.

    Phases: ``IDLE -> VALIDATING -> SUBMITTING -> SUCCEEDED | FAILED``.
    ``SUCCEEDED`` returns to ``IDLE`` through :meth:`acknowledge`; ``FAILED``
    accepts a new submit directly and turns into ``IDLE`` on the next edit.
    """

    def __init__(
        self,
        form: "SendVM",
        uc_submit: "SubmitTransaction",
        hooks: Optional[SubmissionHooks] = None,
    ) -> None:
        self.form = form
        self.uc_submit = uc_submit
        self.hooks = hooks or SubmissionHooks()
        self._log = logging.getLogger(__name__)

    def confirmation(self) -> Optional[ConfirmationSummary]:
        """Summary for the confirmation dialog, or ``None`` if not sendable."""
        if not self.form.can_submit:
            return None
        request = self.form.transfer_request()
        if request is None:
            return None
        return ConfirmationSummary(
            to_address=request.to_address,
            amount=request.amount,
            fee=self.form.fee,
            total=amounts.total_cost(request.amount, self.form.fee),
            memo=request.memo,
            fiat_amount=self.form.fiat_amount(),
            currency_code=self.form.currency_code,
        )

    async def submit(self) -> Optional[SubmissionOutcome]:
        """Validate the draft and broadcast it.

        Returns ``None`` when the request is ignored (already in flight, form
        disposed, awaiting acknowledgment) or the draft is invalid. Otherwise
        returns the terminal outcome, which has already been written to the
        form unless the form was disposed meanwhile.
        """
        form = self.form
        if form.disposed or form.in_flight or form.phase not in _ACCEPTING_PHASES:
            self._log.debug("Ignoring submit request in phase %s", form.phase.value)
            return None

        # Everything up to the backend call runs without yielding, so a second
        # submit scheduled on the same loop sees ``in_flight`` already set.
        self._set_phase(SubmissionPhase.VALIDATING)
        request = form.transfer_request()
        if request is None:
            self._log.info("Submit blocked by input errors: %s", sorted(form.field_errors))
            self._set_phase(SubmissionPhase.IDLE)
            return None

        form.in_flight = True
        form.last_error = None
        self._set_phase(SubmissionPhase.SUBMITTING)
        self._log.info("Submitting %s to %s", request.amount, request.to_address)

        try:
            txid = await self.uc_submit(request)
        except UseCaseError as err:
            outcome: SubmissionOutcome = SubmissionFailed(message=err.message, code=err.code)
        except asyncio.CancelledError:
            if not form.disposed:
                form.in_flight = False
                self._set_phase(SubmissionPhase.IDLE)
            raise
        else:
            outcome = SubmissionSucceeded(transaction_id=txid)

        if form.disposed:
            self._log.debug("Dropping submission result for disposed form: %s", outcome)
            return outcome

        self._apply(outcome)
        return outcome

    def acknowledge(self) -> None:
        """Close the success dialog: clear the draft and return to ``IDLE``."""
        form = self.form
        if form.phase is not SubmissionPhase.SUCCEEDED:
            return
        form.last_transaction_id = None
        form.reset_draft()
        self._set_phase(SubmissionPhase.IDLE)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _apply(self, outcome: SubmissionOutcome) -> None:
        form = self.form
        form.in_flight = False
        if isinstance(outcome, SubmissionSucceeded):
            form.last_error = None
            form.last_transaction_id = outcome.transaction_id
            self._log.info("Transaction sent: %s", outcome.transaction_id)
            self._set_phase(SubmissionPhase.SUCCEEDED)
            self.hooks.on_succeeded(outcome.transaction_id)
            return
        form.last_error = outcome.message
        self._log.warning("Transaction failed (%s): %s", outcome.code, outcome.message)
        self._set_phase(SubmissionPhase.FAILED)
        self.hooks.on_failed(outcome.message)

    def _set_phase(self, phase: SubmissionPhase) -> None:
        self.form.phase = phase
        self.form.notify()
        self.hooks.on_phase(phase)


__all__ = ["SubmissionHooks", "SubmissionOrchestrator"]
