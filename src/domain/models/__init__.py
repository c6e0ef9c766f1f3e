"""Domain models package."""

from .finance import (
    AllocationSlice,
    AssetActivity,
    CategorySummary,
    DashboardMetrics,
    GrowthPoint,
    MonthlyCashflow,
    PortfolioSnapshot,
)
from .members import (
    Member,
    MemberRole,
    MemberSelection,
    SIPSchedule,
    UpcomingSIP,
    Viewer,
)
from .portfolio import Holding, SIPSummary
from .transactions import (
    CASHFLOW_TYPES,
    INFLOW_TYPES,
    OUTFLOW_TYPES,
    AssetType,
    Platform,
    Transaction,
    TransactionType,
)

__all__ = [
    "AllocationSlice",
    "AssetActivity",
    "CategorySummary",
    "DashboardMetrics",
    "GrowthPoint",
    "MonthlyCashflow",
    "PortfolioSnapshot",
    "Member",
    "MemberRole",
    "MemberSelection",
    "SIPSchedule",
    "UpcomingSIP",
    "Viewer",
    "Holding",
    "SIPSummary",
    "AssetType",
    "Platform",
    "Transaction",
    "TransactionType",
    "INFLOW_TYPES",
    "OUTFLOW_TYPES",
    "CASHFLOW_TYPES",
]
