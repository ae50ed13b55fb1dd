"""Parser for ``bitcoinz:`` payment URIs scanned from QR codes or shared links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl

PAYMENT_SCHEME = "bitcoinz"


@dataclass(frozen=True)
class PaymentRequest:
    address: str
    amount: Optional[str] = None
    memo: Optional[str] = None
    label: Optional[str] = None


def parse_payment_uri(text: str) -> Optional[PaymentRequest]:
    """
    Parse ``bitcoinz:<address>?amount=..&memo=..&label=..``.

    The scheme match is case-insensitive. Returns ``None`` when ``text`` is not
    a payment URI or carries no address. Unknown parameters are ignored.
    """
    if not isinstance(text, str):
        return None
    stripped = text.strip()
    scheme, sep, rest = stripped.partition(":")
    if not sep or scheme.lower() != PAYMENT_SCHEME:
        return None
    address, _, query = rest.partition("?")
    address = address.strip().lstrip("/")
    if not address:
        return None

    params = dict(parse_qsl(query, keep_blank_values=False))
    amount = (params.get("amount") or "").strip() or None
    memo = params.get("memo") or params.get("message") or None
    label = params.get("label") or None
    return PaymentRequest(address=address, amount=amount, memo=memo, label=label)


__all__ = ["PAYMENT_SCHEME", "PaymentRequest", "parse_payment_uri"]
