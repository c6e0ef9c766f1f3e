"""Tests for the Streamlit app module."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from src.adapters.interface.streamlit import app
from src.domain.models import (
    AssetType,
    GrowthPoint,
    MemberRole,
    MonthlyCashflow,
    TransactionType,
)
from src.infrastructure.settings import FinanceSettings


def test_fetch_snapshot_invokes_use_case(monkeypatch):
    """_fetch_snapshot should build the use case from settings."""
    captured = {}

    class _FakeUseCase:
        def execute(self, viewer, selection):
            captured["viewer"] = viewer
            captured["selection"] = selection
            return "snapshot"

    settings = FinanceSettings(user_id="m1", family_group_id="fam")
    monkeypatch.setattr(
        app.FinanceSettings,
        "from_env",
        classmethod(lambda cls: settings),
    )
    monkeypatch.setattr(
        app,
        "build_portfolio_snapshot_use_case",
        lambda resolved: _FakeUseCase(),
    )

    result = app._fetch_snapshot("all")

    assert result == "snapshot"
    assert captured["viewer"].user_id == "m1"
    assert captured["selection"].is_all


def test_format_currency_uses_rupee_symbol():
    formatted = app._format_currency(Decimal("1234567.5"), "INR")
    assert formatted == "₹1,234,567.50"
    assert app._format_currency(Decimal("10"), "GBP") == "GBP 10.00"


def test_format_percent_and_delta():
    assert app._format_percent(Decimal("12.346")) == "+12.35%"
    assert app._format_percent(Decimal("0")) == "0.00%"
    assert app._format_delta(Decimal("-5")) == "-5.00"


def test_parse_decimal_handles_widget_values():
    assert app._parse_decimal(12.5) == Decimal("12.5")
    assert app._parse_decimal(None) is None
    assert app._parse_decimal("abc") is None


def test_prepare_donut_chart_data_groups_other():
    items = [
        ("Stock", Decimal("600")),
        ("Gold", Decimal("100")),
        ("FD", Decimal("200")),
        ("Cash", Decimal("100")),
        ("Empty", Decimal("0")),
    ]

    data, total = app._prepare_donut_chart_data(
        items,
        "INR",
        max_categories=2,
    )

    assert total == Decimal("1000")
    assert [row["category"] for row in data] == ["Stock", "FD", "Other"]
    assert data[2]["amount"] == 200.0
    assert data[0]["share_label"] == "60.0%"
    assert data[0]["amount_label"] == "₹600.00"


def test_growth_and_monthly_chart_data():
    growth = app._growth_chart_data(
        [
            GrowthPoint(
                date=date(2024, 1, 1),
                invested=Decimal("1000"),
                current=Decimal("1100"),
            )
        ]
    )
    monthly = app._monthly_chart_data(
        [
            MonthlyCashflow(
                month=date(2024, 3, 1),
                income=Decimal("5000"),
                expense=Decimal("2000"),
                investment=Decimal("1000"),
            )
        ]
    )

    assert [row["series"] for row in growth] == ["Invested", "Current"]
    assert growth[1]["value"] == 1100.0
    assert [row["kind"] for row in monthly] == [
        "Income",
        "Expense",
        "Investment",
    ]
    assert monthly[0]["month"] == "Mar 2024"


def test_holdings_rows_format_values():
    holding = SimpleNamespace(
        asset_name="INFY",
        asset_type=AssetType.STOCK,
        quantity=Decimal("15"),
        avg_price=Decimal("110"),
        current_price=Decimal("120"),
        total_invested=Decimal("1650"),
        current_value=Decimal("1800"),
        gain_loss=Decimal("150"),
        gain_loss_percent=Decimal("9.0909"),
    )

    [row] = app._holdings_rows([holding], "INR")

    assert row["Asset"] == "INFY"
    assert row["Type"] == "Stock"
    assert row["Value"] == "₹1,800.00"
    assert row["Gain/Loss"] == "+150.00"
    assert row["Gain %"] == "+9.09%"


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page

    def selectbox(self, label, options=None, **kwargs):
        if label == "Page":
            return self.page
        return options[0]


class _FakeStreamlit:
    def __init__(self, page: str = "Dashboard") -> None:
        self.sidebar = _FakeSidebar(page)
        self.config_called = False
        self.title_text = None
        self.warning_text = None

    def set_page_config(self, **kwargs):
        self.config_called = True

    def title(self, text: str):
        self.title_text = text

    def warning(self, text: str):
        self.warning_text = text


def test_main_warns_when_ledger_is_empty(monkeypatch):
    """main should warn instead of rendering charts without data."""
    fake_st = _FakeStreamlit()
    snapshot = SimpleNamespace(transactions=[])
    requested = []
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app.FinanceSettings,
        "from_env",
        classmethod(lambda cls: FinanceSettings(user_id="m1")),
    )
    monkeypatch.setattr(
        app,
        "get_usage_logger",
        lambda: SimpleNamespace(info=lambda msg: None),
    )

    def _fake_load(token, schema_version=1):
        requested.append(token)
        return snapshot

    monkeypatch.setattr(app, "_load_snapshot", _fake_load)

    app.main()

    assert fake_st.config_called
    assert fake_st.title_text == "Family Finance"
    assert fake_st.warning_text is not None
    assert requested == ["m1"]


def test_select_member_offers_all_for_admin(monkeypatch):
    """Admins get an "all" option before the member ids."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_load_members",
        lambda: [SimpleNamespace(id="m2", name="Ravi")],
    )

    token = app._select_member(
        FinanceSettings(user_id="m1", user_role=MemberRole.ADMIN)
    )

    assert token == "all"


def test_newest_first_reverses_ledger_order(txn):
    ledger = [
        txn(TransactionType.BUY, on=date(2024, 1, 1), txn_id="buy"),
        txn(TransactionType.SELL, on=date(2024, 1, 1), txn_id="sell"),
        txn(TransactionType.BUY, on=date(2023, 12, 1), txn_id="early"),
    ]

    shown = app._newest_first(ledger)

    assert [item.id for item in shown] == ["sell", "buy", "early"]
