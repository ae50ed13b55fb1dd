"""Address classification for the send form.

Classification is a pure, total function of the raw address text. It only
checks prefixes and lengths; no checksum or network-version verification is
performed, so a ``TRANSPARENT``/``SHIELDED`` result means "well-formed enough
to hand to the wallet backend", not "guaranteed spendable".
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

TRANSPARENT_PREFIX = "t1"
SHIELDED_PREFIXES: Tuple[str, ...] = ("zs", "zc")
MIN_TRANSPARENT_LENGTH = 34
MIN_SHIELDED_LENGTH = 60


class AddressCategory(str, Enum):
    """Transaction-type category derived from an address string."""

    TRANSPARENT = "transparent"
    SHIELDED = "shielded"
    INVALID = "invalid"


def classify(raw: Any) -> AddressCategory:
    """Return the category for ``raw``; never raises."""
    if not isinstance(raw, str) or not raw:
        return AddressCategory.INVALID
    if raw.startswith(TRANSPARENT_PREFIX) and len(raw) >= MIN_TRANSPARENT_LENGTH:
        return AddressCategory.TRANSPARENT
    if raw.startswith(SHIELDED_PREFIXES) and len(raw) >= MIN_SHIELDED_LENGTH:
        return AddressCategory.SHIELDED
    return AddressCategory.INVALID


def is_valid_address(raw: Any) -> bool:
    return classify(raw) is not AddressCategory.INVALID


def memo_permitted(raw: Any) -> bool:
    """Memos can only travel with shielded transactions."""
    return classify(raw) is AddressCategory.SHIELDED


__all__ = [
    "AddressCategory",
    "MIN_SHIELDED_LENGTH",
    "MIN_TRANSPARENT_LENGTH",
    "SHIELDED_PREFIXES",
    "TRANSPARENT_PREFIX",
    "classify",
    "is_valid_address",
    "memo_permitted",
]
