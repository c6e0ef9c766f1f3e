"""Use cases to edit or remove stored transactions."""

from collections.abc import Mapping
from typing import Any

from src.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from src.domain.models import Transaction, Viewer
from src.domain.policies import can_modify_transaction
from src.infrastructure.logging.logger import get_app_logger


IMMUTABLE_FIELDS = ("id", "family_group_id")


class UpdateTransactionUseCase:
    """Apply user edits to a stored transaction."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            transactions_repository: Port storing the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transactions_repository = transactions_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        viewer: Viewer,
        transaction_id: str,
        changes: Mapping[str, Any],
    ) -> Transaction:
        """Update a transaction and recompute its amount.

        Non-admins may only edit their own transactions and cannot move a
        transaction to another member.

        Args:
            viewer: Signed-in user editing the transaction.
            transaction_id: Id of the stored transaction.
            changes: Field values to replace.

        Returns:
            Transaction: The updated transaction.

        Raises:
            LookupError: If the transaction does not exist.
            PermissionError: If the viewer may not edit it.
        """
        current = _load_modifiable(
            self._transactions_repository,
            viewer,
            transaction_id,
        )
        allowed = {
            key: value
            for key, value in changes.items()
            if key not in IMMUTABLE_FIELDS
        }
        if not viewer.is_admin and "member_id" in allowed:
            self._logger.warning(
                f"Ignoring member change on {transaction_id} "
                f"requested by non-admin {viewer.user_id}"
            )
            allowed.pop("member_id")
        updated = current.with_changes(**allowed)
        self._transactions_repository.update_transaction(updated)
        self._logger.info(
            f"Updated transaction {transaction_id}: "
            f"fields={sorted(allowed)}, amount={updated.amount}"
        )
        return updated


class DeleteTransactionUseCase:
    """Remove a stored transaction."""

    def __init__(
        self,
        transactions_repository: TransactionsRepositoryPort,
        logger=None,
    ) -> None:
        self._transactions_repository = transactions_repository
        self._logger = logger or get_app_logger()

    def execute(self, viewer: Viewer, transaction_id: str) -> None:
        """Delete a transaction the viewer owns, or any when admin.

        Raises:
            LookupError: If the transaction does not exist.
            PermissionError: If the viewer may not delete it.
        """
        _load_modifiable(
            self._transactions_repository,
            viewer,
            transaction_id,
        )
        self._transactions_repository.delete_transaction(transaction_id)
        self._logger.info(f"Deleted transaction {transaction_id}")


def _load_modifiable(
    repository: TransactionsRepositoryPort,
    viewer: Viewer,
    transaction_id: str,
) -> Transaction:
    transaction = repository.get_transaction(transaction_id)
    if transaction is None:
        raise LookupError(f"Unknown transaction: {transaction_id}")
    if not can_modify_transaction(viewer, transaction):
        raise PermissionError(
            f"User {viewer.user_id} cannot modify transaction "
            f"{transaction_id}"
        )
    return transaction


__all__ = ["UpdateTransactionUseCase", "DeleteTransactionUseCase"]
