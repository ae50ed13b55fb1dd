from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional
from uuid import uuid4

from zsend.domain.amounts import to_decimal
from zsend.domain.entities import Balance, TransferRequest
from zsend.domain.ports import WalletPort


@dataclass
class WalletMock(WalletPort):
    """Offline substitute for ``WalletRestAdapter`` with deterministic responses.

    ``gate`` lets tests hold a submission open until they release it.
    """

    spendable: Decimal = Decimal("10")
    unconfirmed: Decimal = Decimal("0")
    fail_with: Optional[Exception] = None
    txid: Optional[str] = None
    gate: Optional[asyncio.Event] = None
    sent: List[TransferRequest] = field(default_factory=list)
    balance_calls: int = 0

    # ---------- WalletPort ----------

    async def get_balance(self) -> Balance:
        self.balance_calls += 1
        return Balance(spendable=self.spendable, unconfirmed=self.unconfirmed)

    async def submit_transaction(
        self, to_address: str, amount: Decimal, memo: Optional[str] = None
    ) -> str:
        self.sent.append(TransferRequest(to_address=to_address, amount=amount, memo=memo))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        self.spendable -= to_decimal(amount)
        return self.txid if self.txid is not None else uuid4().hex


__all__ = ["WalletMock"]
