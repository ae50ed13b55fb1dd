"""Screen-scoped lifetime of one send form.

Entering the screen acquires its resources (initial balance fetch, periodic
balance refresh task); leaving releases them unconditionally and disposes the
view model so a submission still pending in the background cannot write into
a screen that no longer exists.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable, Optional

from zsend.domain.entities import SubmissionOutcome, SubmissionSucceeded
from zsend.domain.ports import UseCaseError
from zsend.usecases.fetch_balance import FetchBalance
from zsend.usecases.submission_orchestrator import SubmissionOrchestrator
from zsend.viewmodels.send_vm import SendVM


class SendScreen:
    """Async context manager around ``SendVM`` and its orchestrator."""

    def __init__(
        self,
        *,
        vm: SendVM,
        orchestrator: SubmissionOrchestrator,
        uc_balance: FetchBalance,
        refresh_interval_s: float = 30.0,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self.vm = vm
        self.orchestrator = orchestrator
        self.uc_balance = uc_balance
        self.refresh_interval_s = max(0.1, float(refresh_interval_s))
        self.on_close = on_close
        self.balance_error: Optional[str] = None
        self._refresh_task: Optional[asyncio.Task] = None
        self._log = logging.getLogger(__name__)

    async def __aenter__(self) -> "SendScreen":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._refresh_task is not None

    async def open(self) -> None:
        if self._refresh_task is not None:
            return
        await self.refresh_balance()
        self._refresh_task = asyncio.create_task(self._refresh_loop())
        self._log.debug("Send screen opened")

    async def close(self) -> None:
        task, self._refresh_task = self._refresh_task, None
        try:
            if task is not None:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        finally:
            self.vm.dispose()
            if self.on_close is not None:
                self.on_close()
            self._log.debug("Send screen closed")

    async def refresh_balance(self) -> bool:
        """Fetch the balance once; keeps the previous value on failure."""
        try:
            balance = await self.uc_balance()
        except UseCaseError as err:
            self.balance_error = err.message
            self._log.warning("Balance refresh failed (%s): %s", err.code, err.message)
            return False
        if self.vm.disposed:
            return False
        self.balance_error = None
        self.vm.set_balance(balance)
        return True

    async def submit(self) -> Optional[SubmissionOutcome]:
        outcome = await self.orchestrator.submit()
        if isinstance(outcome, SubmissionSucceeded) and not self.vm.disposed:
            await self.refresh_balance()
        return outcome

    def acknowledge(self) -> None:
        self.orchestrator.acknowledge()

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval_s)
            await self.refresh_balance()


__all__ = ["SendScreen"]
