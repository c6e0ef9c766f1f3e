"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from src.domain.models import Transaction


def warn_on_oversell(
    transaction: Transaction,
    remaining_quantity: Decimal,
    logger: Logger,
) -> None:
    """Warn when an outflow leaves a position below zero units.

    Args:
        transaction: Sell or withdraw transaction just applied.
        remaining_quantity: Position quantity after the outflow.
        logger: Logger used for warnings.
    """
    if remaining_quantity < 0:
        logger.warning(
            f"Position over-sold for asset={transaction.asset_name} "
            f"on {transaction.date.isoformat()}: quantity={remaining_quantity}"
        )


def validate_positive_price(value: Decimal, label: str = "price") -> Decimal:
    """Return the value when strictly positive.

    Args:
        value: Price or NAV supplied by a user.
        label: Name used in the error message.

    Returns:
        Decimal: The validated value.

    Raises:
        ValueError: If the value is zero or negative.
    """
    if not value > 0:
        raise ValueError(f"{label} must be greater than zero, got {value}")
    return value


__all__ = ["warn_on_oversell", "validate_positive_price"]
