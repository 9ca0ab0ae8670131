"""Exact decimal arithmetic for monetary amounts.

Amounts are persisted as floats by the storage layer; every calculation
goes through ``Decimal`` quantized to minor units so that totals never
pick up binary floating point error.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal | None:
    """Convert an int, float, str or Decimal to a two-place Decimal.

    Floats go through their shortest string form, so ``10.1`` becomes
    ``Decimal("10.10")`` rather than its exact binary expansion.
    """
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity) -> Decimal | None:
    """Price of ``quantity`` units, or None when either part is missing."""
    if unit_price is None or quantity is None:
        return None
    return (to_money(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def money_sum(amounts) -> Decimal:
    total = ZERO
    for amount in amounts:
        total += to_money(amount)
    return total
