"""Use case to record a new ledger transaction."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.ports.price_overrides_repository import (
    PriceOverridesRepositoryPort,
)
from src.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from src.domain.models import (
    AssetType,
    Platform,
    Transaction,
    TransactionType,
    Viewer,
)
from src.domain.policies import can_modify_transaction, resolve_owner
from src.infrastructure.logging.logger import get_app_logger


PRICE_SETTING_TYPES = frozenset({TransactionType.BUY, TransactionType.SIP})


@dataclass(frozen=True)
class TransactionDraft:
    """User input for a new transaction, before normalization.

    Attributes:
        transaction_type: Ledger event kind.
        date: Event date.
        price: Unit price, or the amount for income and expenses.
        quantity: Unit count; defaults to 1 when omitted.
        asset_name: Instrument name, optional for income and expenses.
        asset_type: Instrument family; forced to Cash for cash-flow types.
        platform: Custodian; forced to Cash for cash-flow types.
        category: Income or expense category.
        sip_id: SIP grouping key, kept for SIP transactions only.
        notes: Free text.
        member_id: Member to record for; honored for admins only.
    """

    transaction_type: TransactionType
    date: date
    price: Decimal
    quantity: Decimal | None = None
    asset_name: str = ""
    asset_type: AssetType = AssetType.STOCK
    platform: Platform = Platform.ZERODHA
    category: str | None = None
    sip_id: str | None = None
    notes: str = ""
    member_id: str | None = None


class RecordTransactionUseCase:
    """Validate, normalize and store new transactions."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        price_repository: PriceOverridesRepositoryPort,
        family_group_id: str,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port storing the ledger.
            price_repository: Port storing manual price overrides.
            family_group_id: Family group the records belong to.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transactions_repository = transactions_repository
        self._price_repository = price_repository
        self._family_group_id = family_group_id
        self._logger = logger or get_app_logger()

    def execute(self, viewer: Viewer, draft: TransactionDraft) -> Transaction:
        """Record a transaction from user input.

        Args:
            viewer: Signed-in user recording the transaction.
            draft: Raw form values.

        Returns:
            Transaction: The stored transaction.
        """
        owner = resolve_owner(viewer, draft.member_id)
        return self.save(viewer, self._normalize(draft, owner))

    def save(self, viewer: Viewer, transaction: Transaction) -> Transaction:
        """Store an already built transaction.

        Buy and SIP transactions with a positive price also become the
        asset's latest manual quote.

        Args:
            viewer: Signed-in user recording the transaction.
            transaction: Transaction to store.

        Returns:
            Transaction: The stored transaction.

        Raises:
            PermissionError: If the viewer may not write for the owner.
        """
        if not can_modify_transaction(viewer, transaction):
            raise PermissionError(
                f"User {viewer.user_id} cannot record transactions "
                f"for member {transaction.member_id}"
            )
        if transaction.family_group_id is None:
            transaction = transaction.with_changes(
                family_group_id=self._family_group_id
            )
        stored = self._transactions_repository.add_transaction(transaction)
        self._logger.info(
            f"Recorded {stored.transaction_type.value} of "
            f"{stored.asset_name} for member={stored.member_id}: "
            f"amount={stored.amount}"
        )
        if (
            stored.transaction_type in PRICE_SETTING_TYPES
            and stored.price > 0
        ):
            self._price_repository.upsert_price(
                self._family_group_id,
                stored.asset_name,
                stored.price,
                asset_id=stored.asset_id,
            )
        return stored

    def _normalize(
        self,
        draft: TransactionDraft,
        owner: str,
    ) -> Transaction:
        is_cashflow = draft.transaction_type in (
            TransactionType.INCOME,
            TransactionType.EXPENSE,
        )
        quantity = draft.quantity if draft.quantity is not None else Decimal(1)
        asset_name = draft.asset_name.strip()
        if is_cashflow and not asset_name:
            asset_name = draft.transaction_type.value
        if not asset_name:
            raise ValueError("asset name is required")
        return Transaction(
            id="",
            member_id=owner,
            asset_name=asset_name,
            asset_type=AssetType.CASH if is_cashflow else draft.asset_type,
            transaction_type=draft.transaction_type,
            date=draft.date,
            quantity=quantity,
            price=draft.price,
            sip_id=(
                draft.sip_id or None
                if draft.transaction_type == TransactionType.SIP
                else None
            ),
            category=(draft.category or None) if is_cashflow else None,
            platform=Platform.CASH if is_cashflow else draft.platform,
            notes=draft.notes,
            family_group_id=self._family_group_id,
        )


__all__ = ["RecordTransactionUseCase", "TransactionDraft"]
