from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from backoffice.validation import ValidationError


CENT = Decimal("0.01")

# Matches Numeric(18, 2): 16 integer digits.
MAX_AMOUNT = Decimal("9999999999999999.99")


def to_money(value, field: str = "amount") -> Decimal:
    """
    Normalize a monetary input to a two-place Decimal.

    Accepts Decimal, int, or a numeric string. Floats are rejected outright:
    binary rounding has already happened by the time one arrives here.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a decimal amount")
    if isinstance(value, float):
        raise ValidationError(f"{field} must be a decimal string, not a float")
    if isinstance(value, str):
        value = value.strip()
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a decimal amount")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite amount")

    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f"{field} exceeds the maximum supported amount")
    return amount


def line_total(unit_price, quantity: int) -> Decimal:
    """unit_price * quantity, quantized to cents."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("quantity must be an integer")
    return to_money(to_money(unit_price, "unit_price") * quantity, "total_price")
