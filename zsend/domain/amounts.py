"""Amount parsing and affordability checks in exact decimal arithmetic."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_DOWN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
)
from typing import Any, Optional, Union

from .errors import InvalidAmount, ValidationError

COIN_DECIMALS = 8
COIN_QUANTUM = Decimal(1).scaleb(-COIN_DECIMALS)
FIAT_QUANTUM = Decimal("0.01")
ZERO = Decimal(0)

# Unbounded precision: sums and differences of finite decimals are exact.
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

_AMOUNT_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")

AmountInput = Union[str, Decimal, None]


def to_decimal(value: Any) -> Decimal:
    """Coerce balances/fees to ``Decimal`` without binary float artifacts."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise TypeError("Boolean is not a valid amount.")
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a decimal value: {value!r}") from exc
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")
    if not result.is_finite():
        raise ValueError(f"Not a finite decimal value: {value!r}")
    return result


def parse_amount(raw: AmountInput) -> Decimal:
    """Parse user amount text into a non-negative ``Decimal``.

    Only plain literals are accepted (``"1"``, ``"0.5"``, ``".5"``, ``"2."``);
    signs, exponents, separators and special values are rejected.

    Raises:
        InvalidAmount: ``EMPTY_AMOUNT`` for blank input, ``NOT_A_NUMBER`` for
            anything that is not a non-negative decimal.
    """
    if raw is None:
        raise InvalidAmount(ValidationError.EMPTY_AMOUNT, "Amount is required")
    if isinstance(raw, Decimal):
        if not raw.is_finite() or raw < 0:
            raise InvalidAmount(ValidationError.NOT_A_NUMBER, "Invalid amount")
        return raw
    text = str(raw).strip()
    if not text:
        raise InvalidAmount(ValidationError.EMPTY_AMOUNT, "Amount is required")
    if not _AMOUNT_RE.match(text):
        raise InvalidAmount(ValidationError.NOT_A_NUMBER, "Invalid amount")
    return Decimal(text)


@dataclass(frozen=True)
class AmountRequest:
    """Requested spend checked against fee and spendable balance."""

    amount: AmountInput
    fee: Decimal
    spendable: Decimal


def total_cost(amount: Decimal, fee: Decimal) -> Decimal:
    return _EXACT.add(amount, fee)


def validate(request: AmountRequest) -> Optional[ValidationError]:
    """Return the first failed rule for ``request`` or ``None`` when sendable."""
    try:
        amount = parse_amount(request.amount)
    except InvalidAmount as exc:
        return exc.code
    if amount <= 0:
        return ValidationError.NON_POSITIVE_AMOUNT
    fee = to_decimal(request.fee)
    spendable = to_decimal(request.spendable)
    if total_cost(amount, fee) > spendable:
        return ValidationError.INSUFFICIENT_BALANCE
    return None


def max_sendable(fee: Any, spendable: Any) -> Decimal:
    """Largest amount that still leaves room for ``fee``; never negative."""
    remaining = _EXACT.subtract(to_decimal(spendable), to_decimal(fee))
    return remaining if remaining > 0 else ZERO


def format_coin(value: Decimal) -> str:
    """Render a coin amount with the unit's full 8-decimal precision."""
    quantized = to_decimal(value).quantize(COIN_QUANTUM, rounding=ROUND_DOWN, context=_EXACT)
    return f"{quantized:f}"


def fiat_to_coin(fiat: Decimal, price: Decimal) -> Decimal:
    """Convert a fiat amount to coin units, rounding down to 8 decimals."""
    fiat = to_decimal(fiat)
    price = to_decimal(price)
    if price <= 0:
        raise ValueError("Fiat price must be positive.")
    # enough digits for the whole integer part plus the coin decimals
    integer_digits = max(fiat.adjusted() - price.adjusted() + 2, 1)
    ctx = Context(
        prec=integer_digits + COIN_DECIMALS + 2,
        rounding=ROUND_DOWN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
    )
    return ctx.divide(fiat, price).quantize(COIN_QUANTUM, rounding=ROUND_DOWN, context=ctx)


def coin_to_fiat(coin: Decimal, price: Decimal, *, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Convert a coin amount to fiat, rounded to cents."""
    product = _EXACT.multiply(to_decimal(coin), to_decimal(price))
    return product.quantize(FIAT_QUANTUM, rounding=rounding, context=_EXACT)


__all__ = [
    "AmountRequest",
    "COIN_DECIMALS",
    "COIN_QUANTUM",
    "coin_to_fiat",
    "fiat_to_coin",
    "format_coin",
    "max_sendable",
    "parse_amount",
    "to_decimal",
    "total_cost",
    "validate",
]
