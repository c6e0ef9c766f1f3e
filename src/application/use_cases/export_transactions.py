"""Use case to export the ledger as CSV text."""

from collections.abc import Sequence

from src.domain.models import Transaction
from src.infrastructure.logging.logger import get_app_logger


CSV_HEADERS = (
    "Date",
    "Type",
    "Asset Name",
    "Asset Type",
    "Quantity",
    "Price",
    "Amount",
    "Platform",
    "Category",
    "Notes",
)


def _quote(value: str | None) -> str:
    """Wrap free text in double quotes, doubling embedded quotes."""
    escaped = (value or "").replace('"', '""')
    return f'"{escaped}"'


def format_csv_row(transaction: Transaction) -> str:
    """Format one transaction as a CSV line."""
    return ",".join(
        [
            transaction.date.isoformat(),
            transaction.transaction_type.value,
            _quote(transaction.asset_name),
            transaction.asset_type.value,
            str(transaction.quantity),
            str(transaction.price),
            str(transaction.amount),
            transaction.platform.value,
            _quote(transaction.category),
            _quote(transaction.notes),
        ]
    )


class ExportTransactionsUseCase:
    """Render transactions as CSV text."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()

    def execute(self, transactions: Sequence[Transaction]) -> str:
        """Return the CSV document for the given transactions.

        Args:
            transactions: Transactions to export, in display order.

        Returns:
            str: Header line followed by one line per transaction.

        Raises:
            ValueError: If there is nothing to export.
        """
        if not transactions:
            raise ValueError("No transactions to export")
        lines = [",".join(CSV_HEADERS)]
        lines.extend(format_csv_row(txn) for txn in transactions)
        self._logger.info(f"Exported {len(transactions)} transactions")
        return "\n".join(lines)


__all__ = ["ExportTransactionsUseCase", "CSV_HEADERS", "format_csv_row"]
