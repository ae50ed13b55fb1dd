"""Adapter and use-case wiring for the send screen runtime.

This module owns lazy construction of the wallet adapter and the use-case
objects that depend on values in :class:`zsend.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.wallet_rest import WalletRestAdapter
from ..domain.ports import WalletPort
from ..usecases.fetch_balance import FetchBalance
from ..usecases.submit_transaction import SubmitTransaction
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache the wallet adapter and use-cases from settings state.

    Call chain:
        ``zsend.app.main.create_send_screen`` creates one instance and calls
        ``ensure_ready`` before building the screen.
    """

    def __init__(self, settings_vm: SettingsVM, *, wallet_port: Optional[WalletPort] = None) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Settings state with the wallet URL, key and timeouts.
            wallet_port: Pre-built backend (tests, offline mode); skips the
                REST adapter entirely when given.
        """
        self.settings_vm = settings_vm
        self._wallet: Optional[WalletPort] = wallet_port
        self.uc_submit: Optional[SubmitTransaction] = None
        self.uc_balance: Optional[FetchBalance] = None
        self._log = logging.getLogger(__name__)

    @property
    def wallet(self) -> Optional[WalletPort]:
        return self._wallet

    def ensure_ready(self) -> bool:
        """Ensure the wallet backend and use-cases are available.

        Returns:
            ``True`` when dependencies are available, ``False`` when no wallet
            URL is configured and no backend was injected.
        """
        if self._wallet is None:
            url = self.settings_vm.wallet_url
            if not url:
                return False
            self._wallet = WalletRestAdapter(
                url,
                api_key=self.settings_vm.api_key or None,
                request_timeout_s=self.settings_vm.request_timeout_s,
                send_timeout_s=self.settings_vm.send_timeout_s,
                retries=self.settings_vm.retries,
            )
            self._log.info("Wallet backend configured at %s", url)

        if self.uc_submit is None:
            self.uc_submit = SubmitTransaction(self._wallet)
        if self.uc_balance is None:
            self.uc_balance = FetchBalance(self._wallet)
        return True

    def reset(self) -> None:
        """Drop cached adapters after settings change."""
        if isinstance(self._wallet, WalletRestAdapter):
            self._wallet.close()
            self._wallet = None
        self.uc_submit = None
        self.uc_balance = None
