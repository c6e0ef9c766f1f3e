"""SQLAlchemy-backed repository for manual price overrides."""

from decimal import Decimal

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.price_overrides_repository import (
    PriceOverridesRepositoryPort,
)
from src.utils.decimal_utils import coerce_decimal


CREATE_PRICE_UPDATES_SQL = """
CREATE TABLE IF NOT EXISTS price_updates (
    family_group_id TEXT NOT NULL,
    asset_name TEXT NOT NULL,
    asset_id TEXT,
    current_price TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (family_group_id, asset_name)
)
"""

SELECT_PRICES_SQL = text(
    """
    SELECT asset_name, current_price
    FROM price_updates
    WHERE family_group_id = :family_group_id
    """
)

UPDATE_PRICE_SQL = text(
    """
    UPDATE price_updates
    SET current_price = :current_price,
        updated_at = CURRENT_TIMESTAMP
    WHERE family_group_id = :family_group_id AND asset_name = :asset_name
    """
)

INSERT_PRICE_SQL = text(
    """
    INSERT INTO price_updates (
        family_group_id, asset_name, asset_id, current_price
    )
    VALUES (:family_group_id, :asset_name, :asset_id, :current_price)
    """
)


class SqlAlchemyPriceOverridesRepository(PriceOverridesRepositoryPort):
    """Repository backed by SQLAlchemy for manual asset quotes."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def prepare_storage(self) -> None:
        """Ensure the price_updates table exists."""
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_PRICE_UPDATES_SQL)

    def fetch_prices(self, family_group_id: str) -> dict[str, Decimal]:
        """Return the latest manual price per asset name."""
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_PRICES_SQL,
                {"family_group_id": family_group_id},
            ).all()
        return {
            row.asset_name: coerce_decimal(row.current_price)
            for row in rows
            if row.asset_name and row.current_price
        }

    def upsert_price(
        self,
        family_group_id: str,
        asset_name: str,
        price: Decimal,
        asset_id: str | None = None,
    ) -> None:
        """Update the asset's quote, inserting it on first use."""
        params = {
            "family_group_id": family_group_id,
            "asset_name": asset_name,
            "asset_id": asset_id,
            "current_price": str(price),
        }
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            result = conn.execute(UPDATE_PRICE_SQL, params)
            if result.rowcount == 0:
                conn.execute(INSERT_PRICE_SQL, params)


__all__ = [
    "SqlAlchemyPriceOverridesRepository",
    "CREATE_PRICE_UPDATES_SQL",
]
