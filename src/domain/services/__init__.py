"""Domain services package."""

from .holdings import compute_holdings, sort_chronologically
from .members import filter_transactions_for_member
from .metrics import (
    compute_asset_activity,
    compute_dashboard_metrics,
    compute_investment_growth,
    compute_monthly_cashflow,
)
from .sip import (
    build_sip_payment,
    compute_sip_summaries,
    next_due_date,
    project_upcoming_sips,
)
from .validation import validate_positive_price, warn_on_oversell

__all__ = [
    "compute_holdings",
    "sort_chronologically",
    "filter_transactions_for_member",
    "compute_asset_activity",
    "compute_dashboard_metrics",
    "compute_investment_growth",
    "compute_monthly_cashflow",
    "build_sip_payment",
    "compute_sip_summaries",
    "next_due_date",
    "project_upcoming_sips",
    "validate_positive_price",
    "warn_on_oversell",
]
