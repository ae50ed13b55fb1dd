from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from zsend.domain.amounts import to_decimal
from zsend.domain.entities import Balance
from zsend.domain.ports import WalletPort

from .api_errors import ApiError, raise_for_response
from .http_client import HttpConfig, RetryingSession


class WalletRestAdapter(WalletPort):
    """``WalletPort`` over the wallet's JSON HTTP bridge.

    Endpoints:
        ``GET  {base}/balance`` -> ``{"spendable": "1.5", "unconfirmed": "0"}``
        ``POST {base}/send``    -> ``{"txid": "..."}``

    Amounts travel as decimal strings. Blocking ``requests`` calls run in a
    worker thread so the UI event loop keeps running while a send is pending.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        send_timeout_s: int = 120,
        retries: int = 2,
    ) -> None:
        if not str(base_url or "").strip():
            raise ValueError("WalletRestAdapter requires a wallet URL")
        self.base_url = str(base_url).strip().rstrip("/")
        self.cfg = HttpConfig(
            request_timeout_s=request_timeout_s,
            send_timeout_s=send_timeout_s,
            retries=retries,
        )
        self.session = RetryingSession(api_key or None, self.cfg)
        self._log = logging.getLogger(__name__)

    # ---------- WalletPort ----------

    async def get_balance(self) -> Balance:
        return await asyncio.to_thread(self.fetch_balance)

    async def submit_transaction(
        self, to_address: str, amount: Decimal, memo: Optional[str] = None
    ) -> str:
        return await asyncio.to_thread(self.send, to_address, amount, memo)

    # ---------- Blocking implementation ----------

    def fetch_balance(self) -> Balance:
        ctx = "balance"
        resp = self.session.get(f"{self.base_url}/balance")
        raise_for_response(resp, ctx)
        data = self._json_object(resp, ctx)
        try:
            return Balance(
                spendable=to_decimal(data.get("spendable", 0)),
                unconfirmed=to_decimal(data.get("unconfirmed", 0)),
            )
        except (TypeError, ValueError) as exc:
            raise ApiError(f"{ctx}: malformed balance payload", payload=data, context=ctx) from exc

    def send(self, to_address: str, amount: Decimal, memo: Optional[str] = None) -> str:
        ctx = "send"
        body: Dict[str, Any] = {"address": to_address, "amount": f"{to_decimal(amount):f}"}
        if memo:
            body["memo"] = memo
        self._log.info("Broadcasting %s to %s", body["amount"], to_address)
        resp = self.session.post(f"{self.base_url}/send", json_body=body)
        raise_for_response(resp, ctx)
        data = self._json_object(resp, ctx)
        txid = data.get("txid") or data.get("transaction_id") or ""
        return str(txid).strip()

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _json_object(resp: Any, ctx: str) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as exc:
            raise ApiError(f"{ctx}: invalid JSON response", context=ctx) from exc
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected object response", payload=data, context=ctx)
        return data


__all__ = ["WalletRestAdapter"]
