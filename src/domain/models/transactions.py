"""Domain models for ledger transactions."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from src.utils.decimal_utils import coerce_decimal


class AssetType(str, Enum):
    """Instrument families a transaction can refer to."""

    STOCK = "Stock"
    MUTUAL_FUND = "Mutual Fund"
    GOLD = "Gold"
    CASH = "Cash"
    ETF = "ETF"
    FD = "FD"
    OTHER = "Other"


class TransactionType(str, Enum):
    """Kinds of ledger events."""

    BUY = "Buy"
    SELL = "Sell"
    SIP = "SIP"
    DEPOSIT = "Deposit"
    WITHDRAW = "Withdraw"
    INCOME = "Income"
    EXPENSE = "Expense"


class Platform(str, Enum):
    """Custodian or broker label, display only."""

    GROWW = "Groww"
    ZERODHA = "Zerodha"
    BANK = "Bank"
    CASH = "Cash"
    OTHER = "Other"


INFLOW_TYPES = frozenset(
    {TransactionType.BUY, TransactionType.SIP, TransactionType.DEPOSIT}
)
OUTFLOW_TYPES = frozenset({TransactionType.SELL, TransactionType.WITHDRAW})
CASHFLOW_TYPES = frozenset({TransactionType.INCOME, TransactionType.EXPENSE})


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger entry.

    ``amount`` is not an init argument: it always equals
    ``quantity * price`` and is recomputed whenever the transaction is
    rebuilt through :meth:`with_changes`.

    Attributes:
        id: Identifier assigned by the storage layer.
        member_id: Owning family member.
        asset_name: Natural join key for aggregation.
        asset_type: Instrument family.
        transaction_type: Ledger event kind.
        date: Calendar date of the event.
        quantity: Unit count.
        price: Unit price.
        amount: Derived ``quantity * price``.
        sip_id: Optional SIP grouping key.
        category: Income/expense category label.
        platform: Custodian label.
        notes: Free text.
        family_group_id: Sharing boundary the record belongs to.
        asset_id: Optional asset master reference, informational only.
    """

    id: str
    member_id: str
    asset_name: str
    asset_type: AssetType
    transaction_type: TransactionType
    date: date
    quantity: Decimal
    price: Decimal
    amount: Decimal = field(init=False)
    sip_id: str | None = None
    category: str | None = None
    platform: Platform = Platform.OTHER
    notes: str = ""
    family_group_id: str | None = None
    asset_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", self.quantity * self.price)

    @property
    def is_inflow(self) -> bool:
        return self.transaction_type in INFLOW_TYPES

    @property
    def is_outflow(self) -> bool:
        return self.transaction_type in OUTFLOW_TYPES

    @property
    def is_cashflow(self) -> bool:
        return self.transaction_type in CASHFLOW_TYPES

    @property
    def is_investment(self) -> bool:
        return not self.is_cashflow

    @property
    def sip_group_key(self) -> str:
        """Return the SIP grouping key, falling back to the asset name."""
        return self.sip_id or self.asset_name

    def with_changes(self, **changes: Any) -> "Transaction":
        """Return a copy with updated fields and a recomputed amount.

        Args:
            **changes: Field values to replace.

        Returns:
            Transaction: Updated transaction.

        Raises:
            ValueError: If ``amount`` is passed explicitly.
        """
        if "amount" in changes:
            raise ValueError("amount is derived from quantity and price")
        return replace(self, **changes)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        """Build a transaction from a storage row or form payload.

        Args:
            record: Mapping with snake_case keys. Dates may be ISO strings
                and numbers may be strings.

        Returns:
            Transaction: Parsed transaction.
        """
        transaction_type = TransactionType(record["transaction_type"])
        raw_quantity = record.get("quantity")
        if raw_quantity in (None, "") and transaction_type in CASHFLOW_TYPES:
            raw_quantity = 1
        raw_date = record["date"]
        if isinstance(raw_date, str):
            raw_date = date.fromisoformat(raw_date[:10])
        return cls(
            id=str(record.get("id") or ""),
            member_id=str(record.get("member_id") or ""),
            asset_name=record.get("asset_name") or "",
            asset_type=AssetType(record.get("asset_type") or AssetType.OTHER),
            transaction_type=transaction_type,
            date=raw_date,
            quantity=coerce_decimal(raw_quantity),
            price=coerce_decimal(record.get("price")),
            sip_id=record.get("sip_id") or None,
            category=record.get("category") or None,
            platform=Platform(record.get("platform") or Platform.OTHER),
            notes=record.get("notes") or "",
            family_group_id=record.get("family_group_id"),
            asset_id=record.get("asset_id"),
        )

    def to_record(self) -> dict[str, Any]:
        """Return a flat mapping suitable for SQL parameters."""
        return {
            "id": self.id,
            "member_id": self.member_id,
            "asset_name": self.asset_name,
            "asset_type": self.asset_type.value,
            "transaction_type": self.transaction_type.value,
            "date": self.date.isoformat(),
            "quantity": str(self.quantity),
            "price": str(self.price),
            "amount": str(self.amount),
            "sip_id": self.sip_id,
            "category": self.category,
            "platform": self.platform.value,
            "notes": self.notes,
            "family_group_id": self.family_group_id,
            "asset_id": self.asset_id,
        }


__all__ = [
    "AssetType",
    "TransactionType",
    "Platform",
    "Transaction",
    "INFLOW_TYPES",
    "OUTFLOW_TYPES",
    "CASHFLOW_TYPES",
]
