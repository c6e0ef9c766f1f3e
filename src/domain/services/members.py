"""Member-scoped views over the family ledger."""

from collections.abc import Iterable

from src.domain.models import MemberSelection, Transaction


def filter_transactions_for_member(
    transactions: Iterable[Transaction],
    selection: MemberSelection,
) -> list[Transaction]:
    """Return the transactions visible under a member selection.

    Args:
        transactions: Full family ledger.
        selection: Whole family or a single member.

    Returns:
        list[Transaction]: Matching transactions, input order preserved.
    """
    if selection.is_all:
        return list(transactions)
    return [
        txn for txn in transactions if txn.member_id == selection.member_id
    ]


__all__ = ["filter_transactions_for_member"]
