"""Domain models for derived portfolio positions."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.models.transactions import AssetType


@dataclass(frozen=True)
class Holding:
    """Current position in one asset.

    Attributes:
        asset_name: Asset the position is keyed by.
        asset_type: Instrument family of the first transaction seen.
        quantity: Units currently held.
        total_invested: Remaining cost basis.
        avg_price: Weighted-average cost per unit.
        current_price: Manual quote, or the average cost when none exists.
        current_value: ``quantity * current_price``.
        gain_loss: ``current_value - total_invested``.
        gain_loss_percent: Gain relative to cost basis, in percent.
    """

    asset_name: str
    asset_type: AssetType
    quantity: Decimal
    total_invested: Decimal
    avg_price: Decimal
    current_price: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal


@dataclass(frozen=True)
class SIPSummary:
    """Performance of one SIP group."""

    sip_id: str
    asset_name: str
    total_invested: Decimal
    total_units: Decimal
    avg_nav: Decimal
    latest_nav: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_percent: Decimal
    last_date: date


__all__ = ["Holding", "SIPSummary"]
