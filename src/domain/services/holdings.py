"""Holdings aggregation using weighted-average cost."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from logging import Logger

from src.domain.constants import QUANTITY_EPSILON
from src.domain.models import AssetType, Holding, Transaction
from src.domain.services.validation import warn_on_oversell
from src.utils.decimal_utils import ZERO, percent_or_zero, ratio_or_zero


@dataclass
class _Position:
    asset_type: AssetType
    quantity: Decimal = ZERO
    invested: Decimal = ZERO

    @property
    def avg_price(self) -> Decimal:
        return ratio_or_zero(self.invested, self.quantity)


def sort_chronologically(
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Return transactions by ascending date, keeping input order on ties."""
    return sorted(transactions, key=lambda txn: txn.date)


def compute_holdings(
    transactions: Iterable[Transaction],
    manual_prices: Mapping[str, Decimal],
    logger: Logger | None = None,
) -> list[Holding]:
    """Fold a transaction log into current holdings.

    Inflows add units and their full amount to the cost basis. Outflows
    remove units and the share of cost basis they carried at the running
    average price, so a sale never realizes gain in the basis. Assets left
    with a quantity at or below ``QUANTITY_EPSILON`` are not reported.

    Args:
        transactions: Ledger entries in any order; cash-flow types are
            ignored.
        manual_prices: Latest quoted price per asset name.
        logger: Optional logger used to warn about over-sold positions.

    Returns:
        list[Holding]: One holding per asset still held, in the order the
        assets first appear chronologically.
    """
    positions: dict[str, _Position] = {}
    for txn in sort_chronologically(transactions):
        if txn.is_cashflow:
            continue
        position = positions.get(txn.asset_name)
        if position is None:
            position = _Position(asset_type=txn.asset_type)
            positions[txn.asset_name] = position
        if txn.is_inflow:
            position.quantity += txn.quantity
            position.invested += txn.amount
        elif txn.is_outflow:
            avg_price = position.avg_price
            position.quantity -= txn.quantity
            position.invested -= txn.quantity * avg_price
            if logger is not None:
                warn_on_oversell(txn, position.quantity, logger)

    holdings: list[Holding] = []
    for asset_name, position in positions.items():
        if position.quantity <= QUANTITY_EPSILON:
            continue
        holdings.append(
            _build_holding(asset_name, position, manual_prices)
        )
    return holdings


def _build_holding(
    asset_name: str,
    position: _Position,
    manual_prices: Mapping[str, Decimal],
) -> Holding:
    avg_price = position.avg_price
    current_price = manual_prices.get(asset_name)
    if current_price is None:
        current_price = avg_price
    current_value = position.quantity * current_price
    gain_loss = current_value - position.invested
    return Holding(
        asset_name=asset_name,
        asset_type=position.asset_type,
        quantity=position.quantity,
        total_invested=position.invested,
        avg_price=avg_price,
        current_price=current_price,
        current_value=current_value,
        gain_loss=gain_loss,
        gain_loss_percent=percent_or_zero(gain_loss, position.invested),
    )


__all__ = ["compute_holdings", "sort_chronologically"]
