"""Port for reading and writing ledger transactions."""

from typing import Protocol

from src.domain.models import Transaction


class TransactionsRepositoryPort(Protocol):
    """Port exposing the family transaction ledger."""

    def fetch_transactions(self, family_group_id: str) -> list[Transaction]:
        """Return a family ledger oldest first, same-day rows as inserted."""

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        """Return one transaction, or None when it does not exist."""

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """Store a new transaction and return it with its assigned id."""

    def update_transaction(self, transaction: Transaction) -> None:
        """Replace a stored transaction."""

    def delete_transaction(self, transaction_id: str) -> None:
        """Remove a stored transaction."""


__all__ = ["TransactionsRepositoryPort"]
