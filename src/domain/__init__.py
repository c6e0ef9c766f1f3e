"""Domain package for business rules and core models."""

from .constants import (
    ALL_MEMBERS_TOKEN,
    DEFAULT_EXPENSE_CATEGORY,
    DEFAULT_INCOME_CATEGORY,
    QUANTITY_EPSILON,
)
from .models import (
    AssetType,
    DashboardMetrics,
    Holding,
    Member,
    MemberSelection,
    SIPSchedule,
    SIPSummary,
    Transaction,
    TransactionType,
    Viewer,
)
from .policies import resolve_member_selection
from .services import (
    compute_dashboard_metrics,
    compute_holdings,
    compute_sip_summaries,
    filter_transactions_for_member,
)

__all__ = [
    "ALL_MEMBERS_TOKEN",
    "DEFAULT_EXPENSE_CATEGORY",
    "DEFAULT_INCOME_CATEGORY",
    "QUANTITY_EPSILON",
    "AssetType",
    "DashboardMetrics",
    "Holding",
    "Member",
    "MemberSelection",
    "SIPSchedule",
    "SIPSummary",
    "Transaction",
    "TransactionType",
    "Viewer",
    "resolve_member_selection",
    "compute_dashboard_metrics",
    "compute_holdings",
    "compute_sip_summaries",
    "filter_transactions_for_member",
]
