"""Port for manual price overrides."""

from decimal import Decimal
from typing import Protocol


class PriceOverridesRepositoryPort(Protocol):
    """Port exposing the latest manual quote per asset name."""

    def fetch_prices(self, family_group_id: str) -> dict[str, Decimal]:
        """Return the manual price map of a family group."""

    def upsert_price(
        self,
        family_group_id: str,
        asset_name: str,
        price: Decimal,
        asset_id: str | None = None,
    ) -> None:
        """Create or replace the manual price of an asset."""


__all__ = ["PriceOverridesRepositoryPort"]
