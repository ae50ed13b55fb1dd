from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Optional

from zsend.domain import amounts

from ..utils.logging import env_requests_debug


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    wallet_url: str = ""
    api_key: str = ""
    fee: Decimal = Decimal("0.001")
    request_timeout_s: int = 10
    send_timeout_s: int = 120
    retries: int = 2
    balance_refresh_s: int = 30
    currency_code: str = "USD"
    debug_logging: bool = False


_INT_FIELDS = ("request_timeout_s", "send_timeout_s", "retries", "balance_refresh_s")
_STR_FIELDS = ("wallet_url", "api_key", "currency_code")


class SettingsVM:
    """Keeps wallet connection and fee settings, with coercion; no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig(debug_logging=env_requests_debug())
        self.on_save = on_save

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def wallet_url(self) -> str:
        return self.config.wallet_url

    @wallet_url.setter
    def wallet_url(self, value: str) -> None:
        self.config = replace(self.config, wallet_url=self._coerce_str(value).rstrip("/"))

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self.config = replace(self.config, api_key=self._coerce_str(value))

    @property
    def fee(self) -> Decimal:
        return self.config.fee

    @fee.setter
    def fee(self, value: Any) -> None:
        self.config = replace(self.config, fee=self._coerce_fee(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @property
    def send_timeout_s(self) -> int:
        return self.config.send_timeout_s

    @property
    def retries(self) -> int:
        return self.config.retries

    @property
    def balance_refresh_s(self) -> int:
        return self.config.balance_refresh_s

    @property
    def currency_code(self) -> str:
        return self.config.currency_code

    @property
    def debug_logging(self) -> bool:
        return self.config.debug_logging

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if self.config.wallet_url and not self.config.wallet_url.startswith(("http://", "https://")):
            return False
        if self.config.request_timeout_s <= 0 or self.config.send_timeout_s <= 0:
            return False
        return self.config.balance_refresh_s > 0

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {f.name for f in fields(SettingsConfig)}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for key, raw in payload.items():
            updates[key] = self._coerce_config_value(key, raw)
        if updates:
            self.config = replace(self.config, **updates)

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["fee"] = f"{self.config.fee:f}"
        return snapshot

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "wallet_url":
            return self._coerce_str(raw).rstrip("/")
        if key == "currency_code":
            return self._coerce_str(raw).upper() or "USD"
        if key in _STR_FIELDS:
            return self._coerce_str(raw)
        if key in _INT_FIELDS:
            return self._coerce_int(key, raw)
        if key == "fee":
            return self._coerce_fee(raw)
        if key == "debug_logging":
            return self._coerce_bool(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        try:
            coerced = int(value.strip()) if isinstance(value, str) else int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be an integer.") from exc
        if coerced < 0:
            raise ValueError(f"{name} must be non-negative.")
        return coerced

    @staticmethod
    def _coerce_fee(value: Any) -> Decimal:
        try:
            fee = amounts.to_decimal(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("fee must be a decimal amount.") from exc
        if fee < 0:
            raise ValueError("fee must be non-negative.")
        return fee


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM(config=SettingsConfig()).to_dict()


__all__ = ["SettingsConfig", "SettingsVM", "default_settings_payload"]
