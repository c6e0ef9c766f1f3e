"""SQLAlchemy engine for the family ledger database.

The URL comes from ``FINANCE_DB_URL`` (a local ``.env`` file is honored).
Any SQLAlchemy URL works; PostgreSQL and SQLite files are the usual ones.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


DB_URL_ENV = "FINANCE_DB_URL"

POOL_OPTIONS = {
    "poolclass": QueuePool,
    "pool_size": 5,
    "max_overflow": 5,
    "pool_pre_ping": True,
}


def _get_env_var(name: str) -> str:
    """Return a required environment variable after loading ``.env``.

    Raises:
        RuntimeError: If the variable is unset or blank.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    return create_engine(db_url, future=True, **POOL_OPTIONS)


_finance_engine: Optional[Engine] = None


def get_finance_engine() -> Engine:
    """Return the process-wide ledger engine, creating it on first use."""
    global _finance_engine
    if _finance_engine is None:
        _finance_engine = _create_engine(_get_env_var(DB_URL_ENV))
    return _finance_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """Expose the shared ledger engine through ``DatabaseEnginePort``."""

    def get_finance_engine(self) -> Engine:
        return get_finance_engine()


__all__ = [
    "DB_URL_ENV",
    "get_finance_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
