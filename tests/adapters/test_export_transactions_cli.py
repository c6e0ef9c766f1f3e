"""Tests for the export_transactions_cli adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters import export_transactions_cli
from src.domain.models import TransactionType
from src.infrastructure.settings import FinanceSettings
from tests.builders import make_transaction


def _patch_snapshot(monkeypatch, transactions):
    fake_logger = MagicMock()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = SimpleNamespace(
        transactions=transactions
    )
    monkeypatch.setattr(
        export_transactions_cli,
        "get_app_logger",
        lambda: fake_logger,
    )
    monkeypatch.setattr(
        export_transactions_cli.FinanceSettings,
        "from_env",
        classmethod(lambda cls: FinanceSettings(user_id="m1")),
    )
    monkeypatch.setattr(
        export_transactions_cli,
        "build_portfolio_snapshot_use_case",
        lambda settings: fake_use_case,
    )
    return fake_logger, fake_use_case


def test_main_writes_csv_to_export_path(monkeypatch, tmp_path, capsys):
    """The CLI should write the CSV document and print a summary."""
    target = tmp_path / "ledger.csv"
    monkeypatch.setenv("EXPORT_PATH", str(target))
    monkeypatch.delenv("EXPORT_MEMBER", raising=False)
    _, fake_use_case = _patch_snapshot(
        monkeypatch,
        [make_transaction(TransactionType.BUY, quantity="2", price="5")],
    )

    export_transactions_cli.main()

    viewer, selection = fake_use_case.execute.call_args.args
    assert viewer.user_id == "m1"
    assert selection.is_all
    lines = target.read_text(encoding="utf-8").split("\n")
    assert lines[0].startswith("Date,Type,Asset Name")
    assert lines[1].startswith("2024-01-01,Buy,\"INFY\"")
    assert "Exported 1 transactions" in capsys.readouterr().out


def test_main_skips_empty_ledger(monkeypatch, tmp_path, capsys):
    """Nothing is written when there are no transactions."""
    target = tmp_path / "ledger.csv"
    monkeypatch.setenv("EXPORT_PATH", str(target))
    fake_logger, _ = _patch_snapshot(monkeypatch, [])

    export_transactions_cli.main()

    assert not target.exists()
    fake_logger.warning.assert_called_once()
    assert "No transactions to export" in capsys.readouterr().out
