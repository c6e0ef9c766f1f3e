"""Helpers for Decimal normalization."""

from decimal import Decimal


ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, forms, or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        return Decimal(cleaned) if cleaned else Decimal("0")
    return Decimal(str(value))


def ratio_or_zero(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide two amounts, returning zero for a non-positive denominator.

    Args:
        numerator: Dividend.
        denominator: Divisor; only strictly positive values divide.

    Returns:
        Decimal: The quotient, or zero.
    """
    if denominator > 0:
        return numerator / denominator
    return ZERO


def percent_or_zero(part: Decimal, base: Decimal) -> Decimal:
    """Return ``part / base * 100`` or zero when base is not positive."""
    return ratio_or_zero(part, base) * Decimal("100")


__all__ = ["ZERO", "coerce_decimal", "ratio_or_zero", "percent_or_zero"]
