"""SQLAlchemy-backed repository for ledger transactions."""

import uuid

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.transactions_repository import (
    TransactionsRepositoryPort,
)
from src.domain.models import Transaction


CREATE_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    id TEXT PRIMARY KEY,
    family_group_id TEXT NOT NULL,
    member_id TEXT NOT NULL,
    asset_id TEXT,
    asset_name TEXT NOT NULL,
    asset_type TEXT NOT NULL,
    transaction_type TEXT NOT NULL,
    date TEXT NOT NULL,
    quantity TEXT NOT NULL,
    price TEXT NOT NULL,
    amount TEXT NOT NULL,
    sip_id TEXT,
    category TEXT,
    platform TEXT,
    notes TEXT,
    seq INTEGER NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

_COLUMNS = """
    id, family_group_id, member_id, asset_id, asset_name, asset_type,
    transaction_type, date, quantity, price, sip_id, category, platform,
    notes
"""

SELECT_TRANSACTIONS_SQL = text(
    f"""
    SELECT {_COLUMNS}
    FROM transactions
    WHERE family_group_id = :family_group_id
    ORDER BY date, seq
    """
)

SELECT_TRANSACTION_SQL = text(
    f"""
    SELECT {_COLUMNS}
    FROM transactions
    WHERE id = :id
    """
)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id, family_group_id, member_id, asset_id, asset_name, asset_type,
        transaction_type, date, quantity, price, amount, sip_id, category,
        platform, notes, seq
    )
    VALUES (
        :id, :family_group_id, :member_id, :asset_id, :asset_name,
        :asset_type, :transaction_type, :date, :quantity, :price, :amount,
        :sip_id, :category, :platform, :notes,
        (SELECT COALESCE(MAX(seq), 0) + 1 FROM transactions)
    )
    """
)

UPDATE_TRANSACTION_SQL = text(
    """
    UPDATE transactions
    SET member_id = :member_id,
        asset_id = :asset_id,
        asset_name = :asset_name,
        asset_type = :asset_type,
        transaction_type = :transaction_type,
        date = :date,
        quantity = :quantity,
        price = :price,
        amount = :amount,
        sip_id = :sip_id,
        category = :category,
        platform = :platform,
        notes = :notes
    WHERE id = :id
    """
)

DELETE_TRANSACTION_SQL = text("DELETE FROM transactions WHERE id = :id")


class SqlAlchemyTransactionsRepository(TransactionsRepositoryPort):
    """Repository backed by SQLAlchemy for the transaction ledger."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def prepare_storage(self) -> None:
        """Ensure the transactions table exists."""
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_TRANSACTIONS_SQL)

    def fetch_transactions(self, family_group_id: str) -> list[Transaction]:
        """Return the family ledger by date, then insertion order."""
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_TRANSACTIONS_SQL,
                {"family_group_id": family_group_id},
            ).all()
        return [Transaction.from_record(row._mapping) for row in rows]

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_TRANSACTION_SQL,
                {"id": transaction_id},
            ).first()
        if row is None:
            return None
        return Transaction.from_record(row._mapping)

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """Insert a transaction, assigning an id when it has none.

        Args:
            transaction: Transaction to store.

        Returns:
            Transaction: The stored transaction.
        """
        stored = (
            transaction
            if transaction.id
            else transaction.with_changes(id=uuid.uuid4().hex)
        )
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.execute(INSERT_TRANSACTION_SQL, stored.to_record())
        return stored

    def update_transaction(self, transaction: Transaction) -> None:
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.execute(UPDATE_TRANSACTION_SQL, transaction.to_record())

    def delete_transaction(self, transaction_id: str) -> None:
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.execute(DELETE_TRANSACTION_SQL, {"id": transaction_id})


__all__ = [
    "SqlAlchemyTransactionsRepository",
    "CREATE_TRANSACTIONS_SQL",
]
