from __future__ import annotations

import re
from decimal import Decimal

_AMOUNT_RE = re.compile(r"^(?P<whole>\d*)(?:\.(?P<fraction>\d*))?$")


class InvalidAmountError(ValueError):
    pass


def _split(amount: str) -> tuple[str, str]:
    s = amount.strip()
    match = _AMOUNT_RE.match(s)
    if match is None or not any(ch.isdigit() for ch in s):
        raise InvalidAmountError(f"invalid amount: {amount!r}")
    return match.group("whole") or "0", match.group("fraction") or ""


def to_base_units(amount: str, decimals: int) -> str:
    """
    Convert a human-readable decimal string into an integer string of base units.

    Trailing zeros in the fraction are ignored. Any remaining fractional digit
    beyond `decimals` is rejected instead of being dropped.
    """
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    whole, fraction = _split(amount)
    fraction = fraction.rstrip("0")
    if len(fraction) > decimals:
        raise InvalidAmountError(
            f"amount {amount!r} has more than {decimals} fractional digits"
        )
    digits = (whole + fraction.ljust(decimals, "0")).lstrip("0")
    return digits or "0"


def to_decimal_string(raw: str, decimals: int) -> str:
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    value = raw.strip()
    if not value.isdigit():
        raise InvalidAmountError(f"invalid base-unit amount: {raw!r}")
    if decimals == 0:
        return value.lstrip("0") or "0"
    value = value.rjust(decimals + 1, "0")
    whole = value[:-decimals].lstrip("0") or "0"
    fraction = value[-decimals:].rstrip("0")
    return f"{whole}.{fraction}" if fraction else whole


def parse_amount(amount: str) -> Decimal:
    whole, fraction = _split(amount)
    return Decimal(f"{whole}.{fraction}" if fraction else whole)
