"""
Money helpers.

All sums are accumulated as integer cents and converted back to ``Decimal``
once, so long lists of line items never pick up binary rounding error.
"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal('0.01')
ZERO = Decimal('0.00')
# Largest value a DecimalField(max_digits=12, decimal_places=2) column holds
MAX_AMOUNT = Decimal('9999999999.99')


def as_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() first so floats keep their printed value
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    return as_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value) -> int:
    """Convert a monetary amount to integer cents (half-up)."""
    return int(quantize_money(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def line_total(quantity, unit_price) -> Decimal:
    """Server-side line total: quantity x unit price, rounded to cents."""
    return quantize_money(as_decimal(quantity) * as_decimal(unit_price))


def sum_money(values) -> Decimal:
    return from_cents(sum(to_cents(v) for v in values))
