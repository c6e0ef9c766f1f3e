"""Application use cases package."""

from .export_transactions import ExportTransactionsUseCase
from .get_portfolio_snapshot import (
    GetPortfolioSnapshotUseCase,
    PortfolioSnapshot,
)
from .manage_sip_schedules import ManageSIPSchedulesUseCase
from .record_transaction import RecordTransactionUseCase, TransactionDraft
from .update_price import UpdatePriceUseCase
from .update_transaction import (
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)

__all__ = [
    "ExportTransactionsUseCase",
    "GetPortfolioSnapshotUseCase",
    "PortfolioSnapshot",
    "ManageSIPSchedulesUseCase",
    "RecordTransactionUseCase",
    "TransactionDraft",
    "UpdatePriceUseCase",
    "DeleteTransactionUseCase",
    "UpdateTransactionUseCase",
]
