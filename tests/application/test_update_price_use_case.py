"""Tests for the UpdatePriceUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.update_price import UpdatePriceUseCase


def test_execute_upserts_trimmed_asset() -> None:
    repository = MagicMock()
    use_case = UpdatePriceUseCase(repository, "fam", logger=MagicMock())

    use_case.execute(" INFY ", Decimal("1520.5"))

    repository.upsert_price.assert_called_once_with(
        "fam",
        "INFY",
        Decimal("1520.5"),
    )


@pytest.mark.parametrize(
    ("asset_name", "price"),
    [("INFY", Decimal("0")), ("INFY", Decimal("-3")), (" ", Decimal("10"))],
)
def test_execute_rejects_invalid_input(asset_name, price) -> None:
    repository = MagicMock()
    use_case = UpdatePriceUseCase(repository, "fam", logger=MagicMock())

    with pytest.raises(ValueError):
        use_case.execute(asset_name, price)
    repository.upsert_price.assert_not_called()
