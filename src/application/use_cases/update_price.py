"""Use case to record a manual quote for an asset."""

from decimal import Decimal

from src.application.ports.price_overrides_repository import (
    PriceOverridesRepositoryPort,
)
from src.domain.services import validate_positive_price
from src.infrastructure.logging.logger import get_app_logger


class UpdatePriceUseCase:
    """Store the latest known price of an asset."""

    def __init__(
        self,
        price_repository: PriceOverridesRepositoryPort,
        family_group_id: str,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            price_repository: Port storing manual price overrides.
            family_group_id: Family group the quote applies to.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._price_repository = price_repository
        self._family_group_id = family_group_id
        self._logger = logger or get_app_logger()

    def execute(self, asset_name: str, price: Decimal) -> None:
        """Create or replace the manual price of an asset.

        Args:
            asset_name: Asset the quote applies to.
            price: Latest known unit price.

        Raises:
            ValueError: If the asset name is blank or the price not positive.
        """
        cleaned = asset_name.strip()
        if not cleaned:
            raise ValueError("asset name is required")
        validate_positive_price(price)
        self._price_repository.upsert_price(
            self._family_group_id,
            cleaned,
            price,
        )
        self._logger.info(f"Price updated for {cleaned}: {price}")


__all__ = ["UpdatePriceUseCase"]
