"""Use case to derive the dashboard snapshot from the family ledger."""

from src.application.ports.price_overrides_repository import (
    PriceOverridesRepositoryPort,
)
from src.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from src.domain.models import MemberSelection, PortfolioSnapshot, Viewer
from src.domain.policies import resolve_member_selection
from src.domain.services import (
    compute_dashboard_metrics,
    compute_holdings,
    compute_investment_growth,
    compute_monthly_cashflow,
    compute_sip_summaries,
    filter_transactions_for_member,
)
from src.infrastructure.logging.logger import get_app_logger


class GetPortfolioSnapshotUseCase:
    """Pull the current ledger and recompute every derived view.

    Nothing derived is cached between calls: each execution reads a fresh
    transaction list and price map and folds them from scratch.
    """

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        price_repository: PriceOverridesRepositoryPort,
        family_group_id: str,
        logger=None,
        currency_code: str = "INR",
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port providing the family ledger.
            price_repository: Port providing manual price overrides.
            family_group_id: Family group whose ledger is read.
            logger: Optional logger compatible with logging.Logger-like API.
            currency_code: Display currency carried into the snapshot.
        """
        self._transactions_repository = transactions_repository
        self._price_repository = price_repository
        self._family_group_id = family_group_id
        self._logger = logger or get_app_logger()
        self._currency_code = currency_code

    def execute(
        self,
        viewer: Viewer,
        requested: MemberSelection | None = None,
    ) -> PortfolioSnapshot:
        """Return holdings, SIP summaries and metrics for a selection.

        Args:
            viewer: Signed-in user; non-admins only see their own ledger.
            requested: Selection asked for by the UI, whole family when None.

        Returns:
            PortfolioSnapshot: Derived data for the effective selection.
        """
        selection = resolve_member_selection(
            viewer,
            requested or MemberSelection.all_members(),
        )
        all_transactions = self._transactions_repository.fetch_transactions(
            self._family_group_id
        )
        manual_prices = self._price_repository.fetch_prices(
            self._family_group_id
        )
        transactions = filter_transactions_for_member(
            all_transactions,
            selection,
        )
        self._logger.info(
            f"Fetched {len(all_transactions)} transactions, "
            f"{len(transactions)} visible for member={selection.to_token()}"
        )

        holdings = compute_holdings(
            transactions,
            manual_prices,
            logger=self._logger,
        )
        sip_summaries = compute_sip_summaries(transactions, manual_prices)
        metrics = compute_dashboard_metrics(holdings, transactions)
        self._logger.info(
            f"Portfolio computed: holdings={len(holdings)}, "
            f"invested={metrics.total_invested}, "
            f"value={metrics.total_current_value}"
        )
        return PortfolioSnapshot(
            selection=selection,
            transactions=transactions,
            holdings=holdings,
            sip_summaries=sip_summaries,
            metrics=metrics,
            growth=compute_investment_growth(transactions, metrics),
            monthly_cashflow=compute_monthly_cashflow(transactions),
            currency_code=self._currency_code,
        )


__all__ = ["GetPortfolioSnapshotUseCase", "PortfolioSnapshot"]
