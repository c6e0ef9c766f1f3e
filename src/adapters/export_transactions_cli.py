"""CLI adapter to export the family ledger as a CSV file.

This module wires the snapshot and export use cases to the concrete
infrastructure and writes the CSV document to ``EXPORT_PATH`` or to a dated
file in the working directory.
"""

from datetime import date
import os
from pathlib import Path

from src.application.use_cases.export_transactions import (
    ExportTransactionsUseCase,
)
from src.domain.models import MemberSelection
from src.infrastructure.container import build_portfolio_snapshot_use_case
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceSettings


def _resolve_export_path(today: date) -> Path:
    raw = os.getenv("EXPORT_PATH", "").strip()
    if raw:
        return Path(raw)
    return Path(f"transactions_{today.isoformat()}.csv")


def main() -> None:
    """Export the transactions visible to the configured user."""
    logger = get_app_logger()
    settings = FinanceSettings.from_env()
    snapshot_use_case = build_portfolio_snapshot_use_case(settings)
    snapshot = snapshot_use_case.execute(
        settings.viewer(),
        MemberSelection.parse(os.getenv("EXPORT_MEMBER")),
    )

    try:
        csv_text = ExportTransactionsUseCase(logger=logger).execute(
            snapshot.transactions
        )
    except ValueError as exc:
        logger.warning(f"Export skipped: {exc}")
        print(str(exc))
        return

    path = _resolve_export_path(date.today())
    path.write_text(csv_text, encoding="utf-8")
    print(
        f"Exported {len(snapshot.transactions)} transactions to {path}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
