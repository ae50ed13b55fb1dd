from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol

from .entities import Balance


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class WalletPort(Protocol):
    """Balance and send operations against the wallet backend.

    Timeout and retry policy belong to the implementation; callers await
    ``submit_transaction`` for as long as it takes.
    """

    async def get_balance(self) -> Balance: ...
    async def submit_transaction(
        self, to_address: str, amount: Decimal, memo: Optional[str] = None
    ) -> str: ...  # returns transaction id


class StoragePort(Protocol):
    """Persistence for user settings."""

    def load_user_settings(self) -> dict: ...
    def save_user_settings(self, payload: dict) -> None: ...
