"""Use case for broadcasting one transfer through the wallet backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from zsend.domain.entities import TransferRequest
from zsend.domain.ports import UseCaseError, WalletPort
from zsend.usecases.error_mapping import map_wallet_error

_log = logging.getLogger(__name__)


@dataclass
class SubmitTransaction:
    """Async use-case callable returning the backend transaction id."""

    wallet_port: WalletPort

    async def __call__(self, request: TransferRequest) -> str:
        try:
            txid = await self.wallet_port.submit_transaction(
                request.to_address, request.amount, request.memo
            )
        except Exception as exc:
            mapped = map_wallet_error(exc)
            _log.warning("Send to %s failed (%s): %s", request.to_address, mapped.code, exc)
            raise mapped from exc

        txid = str(txid or "").strip()
        if not txid:
            raise UseCaseError("EMPTY_TXID", "Wallet returned no transaction id.")
        return txid


__all__ = ["SubmitTransaction"]
