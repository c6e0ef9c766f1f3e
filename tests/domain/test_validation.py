"""Tests for domain validation helpers."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.models import TransactionType
from src.domain.services.validation import (
    validate_positive_price,
    warn_on_oversell,
)


def test_validate_positive_price_returns_value():
    assert validate_positive_price(Decimal("12.5")) == Decimal("12.5")


@pytest.mark.parametrize("value", [Decimal("0"), Decimal("-1")])
def test_validate_positive_price_rejects(value):
    with pytest.raises(ValueError, match="NAV"):
        validate_positive_price(value, label="NAV")


def test_warn_on_oversell_only_below_zero(txn):
    logger = MagicMock()
    sell = txn(TransactionType.SELL, quantity="5")

    warn_on_oversell(sell, Decimal("0"), logger)
    logger.warning.assert_not_called()

    warn_on_oversell(sell, Decimal("-2"), logger)
    logger.warning.assert_called_once()
