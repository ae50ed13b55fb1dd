from __future__ import annotations

from dataclasses import dataclass

from zsend.domain.entities import Balance
from zsend.domain.ports import WalletPort
from zsend.usecases.error_mapping import map_wallet_error


@dataclass
class FetchBalance:
    wallet_port: WalletPort

    async def __call__(self) -> Balance:
        try:
            return await self.wallet_port.get_balance()
        except Exception as exc:
            raise map_wallet_error(
                exc,
                default_code="BALANCE_UNAVAILABLE",
                default_message="Could not load wallet balance.",
            ) from exc


__all__ = ["FetchBalance"]
