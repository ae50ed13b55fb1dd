"""Composition root: settings -> controller -> send screen."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from zsend.adapters.storage_local import StorageLocal
from zsend.app.controller import AppController
from zsend.app.send_screen import SendScreen
from zsend.domain.ports import UseCaseError, WalletPort
from zsend.usecases.submission_orchestrator import SubmissionHooks, SubmissionOrchestrator
from zsend.utils.logging import apply_preferences, configure_root
from zsend.viewmodels.send_vm import SendVM
from zsend.viewmodels.settings_vm import SettingsVM


def load_settings(root_dir: str = ".") -> SettingsVM:
    storage = StorageLocal(root_dir=root_dir)
    settings = SettingsVM(on_save=storage.save_user_settings)
    settings.apply_dict(storage.load_user_settings())
    return settings


def create_send_screen(
    root_dir: str = ".",
    *,
    settings: Optional[SettingsVM] = None,
    wallet_port: Optional[WalletPort] = None,
    hooks: Optional[SubmissionHooks] = None,
    on_change: Optional[Callable[[], None]] = None,
) -> SendScreen:
    """Build a ready-to-open send screen.

    Raises:
        UseCaseError: ``WALLET_NOT_CONFIGURED`` when neither a wallet URL nor
            an injected backend is available.
    """
    configure_root()
    settings = settings or load_settings(root_dir)
    apply_preferences(settings.debug_logging)

    controller = AppController(settings, wallet_port=wallet_port)
    if not controller.ensure_ready():
        raise UseCaseError("WALLET_NOT_CONFIGURED", "Configure the wallet URL in settings first.")

    vm = SendVM(fee=settings.fee, on_change=on_change)
    orchestrator = SubmissionOrchestrator(vm, controller.uc_submit, hooks=hooks)
    logging.getLogger(__name__).debug("Send screen built (fee=%s)", settings.fee)
    return SendScreen(
        vm=vm,
        orchestrator=orchestrator,
        uc_balance=controller.uc_balance,
        refresh_interval_s=settings.balance_refresh_s,
        on_close=controller.reset,
    )


__all__ = ["create_send_screen", "load_settings"]
