"""Tests for the database check CLI."""

from unittest.mock import MagicMock

from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from src.adapters import test_db_connection


def test_main_pings_and_prepares_storage(monkeypatch):
    adapter = MagicMock()
    engine = adapter.get_finance_engine.return_value
    engine.url = "sqlite:///ledger.db"
    conn = engine.connect.return_value.__enter__.return_value
    logger = MagicMock()
    prepare = MagicMock()
    monkeypatch.setattr(
        test_db_connection,
        "build_database_adapter",
        lambda: adapter,
    )
    monkeypatch.setattr(test_db_connection, "get_app_logger", lambda: logger)
    monkeypatch.setattr(test_db_connection, "prepare_storage", prepare)

    test_db_connection.main()

    conn.exec_driver_sql.assert_called_once_with("SELECT 1")
    prepare.assert_called_once_with(adapter)
    first_message = logger.info.call_args_list[0].args[0]
    assert first_message == "Finance DB: sqlite:///ledger.db"


def test_main_creates_ledger_tables(monkeypatch):
    from src.infrastructure import container

    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    adapter = MagicMock()
    adapter.get_finance_engine.return_value = engine
    monkeypatch.setattr(
        test_db_connection,
        "build_database_adapter",
        lambda: adapter,
    )
    monkeypatch.setattr(
        test_db_connection,
        "get_app_logger",
        lambda: MagicMock(),
    )
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())

    test_db_connection.main()

    tables = set(inspect(engine).get_table_names())
    assert {"transactions", "sip_schedules"} <= tables
