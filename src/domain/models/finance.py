"""Domain models for financial aggregates."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.models.members import MemberSelection
from src.domain.models.portfolio import Holding, SIPSummary
from src.domain.models.transactions import (
    AssetType,
    Transaction,
    TransactionType,
)
from src.utils.decimal_utils import percent_or_zero


@dataclass(frozen=True)
class AllocationSlice:
    """Current value held in one asset type."""

    asset_type: AssetType
    value: Decimal


@dataclass(frozen=True)
class CategorySummary:
    """Income or expense total for a category."""

    category: str
    amount: Decimal
    type: TransactionType


@dataclass(frozen=True)
class DashboardMetrics:
    """Portfolio-wide and cash-flow-wide totals.

    Attributes:
        total_invested: Sum of holding cost bases.
        total_current_value: Sum of holding values (net worth).
        total_gain_loss: Value minus cost basis.
        overall_gain_percent: Gain relative to cost basis, in percent.
        asset_allocation: Current value per asset type.
        total_income: Sum of income amounts.
        total_expenses: Sum of expense amounts.
        category_breakdown: Totals per income/expense category.
    """

    total_invested: Decimal
    total_current_value: Decimal
    total_gain_loss: Decimal
    overall_gain_percent: Decimal
    asset_allocation: list[AllocationSlice]
    total_income: Decimal
    total_expenses: Decimal
    category_breakdown: list[CategorySummary]

    @property
    def net_cashflow(self) -> Decimal:
        """Return total income minus total expenses."""
        return self.total_income - self.total_expenses

    @property
    def savings_rate(self) -> Decimal:
        """Return the share of income retained, in percent."""
        return percent_or_zero(self.net_cashflow, self.total_income)


@dataclass(frozen=True)
class GrowthPoint:
    """Cumulative invested amount and scaled value at a date."""

    date: date
    invested: Decimal
    current: Decimal


@dataclass(frozen=True)
class MonthlyCashflow:
    """Income, expense and investment totals for a calendar month."""

    month: date
    income: Decimal
    expense: Decimal
    investment: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class AssetActivity:
    """Transaction history and flow totals for one asset."""

    asset_name: str
    transactions: list[Transaction]
    total_bought: Decimal
    total_sold: Decimal


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Everything the dashboard renders for one member selection."""

    selection: MemberSelection
    transactions: list[Transaction]
    holdings: list[Holding]
    sip_summaries: list[SIPSummary]
    metrics: DashboardMetrics
    growth: list[GrowthPoint]
    monthly_cashflow: list[MonthlyCashflow]
    currency_code: str


__all__ = [
    "AllocationSlice",
    "CategorySummary",
    "DashboardMetrics",
    "GrowthPoint",
    "MonthlyCashflow",
    "AssetActivity",
    "PortfolioSnapshot",
]
