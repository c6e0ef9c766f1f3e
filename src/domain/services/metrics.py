"""Dashboard metrics and time series derived from holdings and the ledger."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from src.domain.constants import (
    DEFAULT_EXPENSE_CATEGORY,
    DEFAULT_INCOME_CATEGORY,
)
from src.domain.models import (
    AllocationSlice,
    AssetActivity,
    AssetType,
    CategorySummary,
    DashboardMetrics,
    GrowthPoint,
    Holding,
    MonthlyCashflow,
    Transaction,
    TransactionType,
)
from src.utils.decimal_utils import ZERO, percent_or_zero, ratio_or_zero


def compute_dashboard_metrics(
    holdings: Sequence[Holding],
    transactions: Iterable[Transaction],
) -> DashboardMetrics:
    """Combine holdings and the raw ledger into dashboard totals.

    Args:
        holdings: Output of ``compute_holdings``.
        transactions: Every transaction of the view, cash-flow included.

    Returns:
        DashboardMetrics: Portfolio totals, allocation and cash-flow totals.
    """
    total_invested = sum((h.total_invested for h in holdings), ZERO)
    total_current_value = sum((h.current_value for h in holdings), ZERO)
    total_gain_loss = total_current_value - total_invested

    allocation: dict[AssetType, Decimal] = {}
    for holding in holdings:
        allocation[holding.asset_type] = (
            allocation.get(holding.asset_type, ZERO) + holding.current_value
        )

    total_income = ZERO
    total_expenses = ZERO
    categories: dict[str, CategorySummary] = {}
    for txn in transactions:
        if txn.transaction_type == TransactionType.INCOME:
            total_income += txn.amount
            category = txn.category or DEFAULT_INCOME_CATEGORY
        elif txn.transaction_type == TransactionType.EXPENSE:
            total_expenses += txn.amount
            category = txn.category or DEFAULT_EXPENSE_CATEGORY
        else:
            continue
        previous = categories.get(category)
        running = previous.amount if previous is not None else ZERO
        categories[category] = CategorySummary(
            category=category,
            amount=running + txn.amount,
            type=txn.transaction_type,
        )

    return DashboardMetrics(
        total_invested=total_invested,
        total_current_value=total_current_value,
        total_gain_loss=total_gain_loss,
        overall_gain_percent=percent_or_zero(total_gain_loss, total_invested),
        asset_allocation=[
            AllocationSlice(asset_type=asset_type, value=value)
            for asset_type, value in allocation.items()
        ],
        total_income=total_income,
        total_expenses=total_expenses,
        category_breakdown=list(categories.values()),
    )


def compute_investment_growth(
    transactions: Iterable[Transaction],
    metrics: DashboardMetrics,
) -> list[GrowthPoint]:
    """Build the cumulative invested series for the growth chart.

    The "current" series scales the running invested amount by today's
    value-to-cost ratio; it is an approximation, not a price history.

    Args:
        transactions: Ledger entries of the view.
        metrics: Dashboard totals providing the value-to-cost ratio.

    Returns:
        list[GrowthPoint]: A zero starting point followed by one point per
        date with investment activity, oldest first.
    """
    daily: dict[date, Decimal] = {}
    for txn in transactions:
        if txn.is_inflow:
            daily[txn.date] = daily.get(txn.date, ZERO) + txn.amount
        elif txn.is_outflow:
            daily[txn.date] = daily.get(txn.date, ZERO) - txn.amount
    if not daily:
        return []

    ratio = (
        ratio_or_zero(metrics.total_current_value, metrics.total_invested)
        if metrics.total_invested > 0
        else Decimal("1")
    )
    dates = sorted(daily)
    points = [GrowthPoint(date=dates[0], invested=ZERO, current=ZERO)]
    running = ZERO
    for day in dates:
        running += daily[day]
        current = running * ratio
        points.append(
            GrowthPoint(
                date=day,
                invested=max(running, ZERO),
                current=max(current, ZERO),
            )
        )
    return points


def compute_monthly_cashflow(
    transactions: Iterable[Transaction],
) -> list[MonthlyCashflow]:
    """Total income, expenses and new investment per calendar month.

    Args:
        transactions: Ledger entries of the view.

    Returns:
        list[MonthlyCashflow]: One entry per month with activity, oldest
        first. Outflows do not count as investment.
    """
    totals: dict[date, list[Decimal]] = {}
    for txn in transactions:
        month = txn.date.replace(day=1)
        bucket = totals.setdefault(month, [ZERO, ZERO, ZERO])
        if txn.transaction_type == TransactionType.INCOME:
            bucket[0] += txn.amount
        elif txn.transaction_type == TransactionType.EXPENSE:
            bucket[1] += txn.amount
        elif txn.is_inflow:
            bucket[2] += txn.amount
    return [
        MonthlyCashflow(
            month=month,
            income=income,
            expense=expense,
            investment=investment,
        )
        for month, (income, expense, investment) in sorted(totals.items())
    ]


def compute_asset_activity(
    asset_name: str,
    transactions: Iterable[Transaction],
) -> AssetActivity:
    """Collect one asset's history with total bought and sold amounts."""
    history = [
        txn for txn in transactions if txn.asset_name == asset_name
    ][::-1]
    history.sort(key=lambda txn: txn.date, reverse=True)
    return AssetActivity(
        asset_name=asset_name,
        transactions=history,
        total_bought=sum(
            (txn.amount for txn in history if txn.is_inflow), ZERO
        ),
        total_sold=sum(
            (txn.amount for txn in history if txn.is_outflow), ZERO
        ),
    )


__all__ = [
    "compute_dashboard_metrics",
    "compute_investment_growth",
    "compute_monthly_cashflow",
    "compute_asset_activity",
]
