"""Tests for the cash-flow Sankey presentation module."""

from decimal import Decimal

from src.adapters.interface.streamlit.sankey_cashflow import (
    DEFICIT_LABEL,
    MIDDLE_LABEL,
    SAVINGS_LABEL,
    build_plotly_figure,
    build_sankey_model,
)
from src.domain.models import (
    CategorySummary,
    DashboardMetrics,
    TransactionType,
)


def _metrics(
    income: list[tuple[str, str]],
    expenses: list[tuple[str, str]],
) -> DashboardMetrics:
    breakdown = [
        CategorySummary(
            category=name,
            amount=Decimal(amount),
            type=TransactionType.INCOME,
        )
        for name, amount in income
    ] + [
        CategorySummary(
            category=name,
            amount=Decimal(amount),
            type=TransactionType.EXPENSE,
        )
        for name, amount in expenses
    ]
    return DashboardMetrics(
        total_invested=Decimal("0"),
        total_current_value=Decimal("0"),
        total_gain_loss=Decimal("0"),
        overall_gain_percent=Decimal("0"),
        asset_allocation=[],
        total_income=sum((Decimal(a) for _n, a in income), Decimal("0")),
        total_expenses=sum((Decimal(a) for _n, a in expenses), Decimal("0")),
        category_breakdown=breakdown,
    )


def test_surplus_adds_savings_node():
    metrics = _metrics(
        income=[("Salary", "5000"), ("Interest", "200")],
        expenses=[("Rent", "2000")],
    )

    model = build_sankey_model(metrics)

    assert model.node_labels == [
        "Salary",
        "Interest",
        MIDDLE_LABEL,
        "Rent",
        SAVINGS_LABEL,
    ]
    budget = model.node_labels.index(MIDDLE_LABEL)
    savings = model.node_labels.index(SAVINGS_LABEL)
    savings_link = [link for link in model.links if link.target == savings]
    assert savings_link[0].source == budget
    assert savings_link[0].value == Decimal("3200")


def test_same_category_on_both_sides_keeps_distinct_keys():
    metrics = _metrics(
        income=[("Gifts", "100")],
        expenses=[("Gifts", "100")],
    )

    model = build_sankey_model(metrics)

    assert "L:Gifts" in model.node_keys
    assert "R:Gifts" in model.node_keys
    assert SAVINGS_LABEL not in model.node_labels


def test_deficit_node_only_when_allowed():
    metrics = _metrics(income=[("Salary", "100")], expenses=[("Rent", "150")])

    hidden = build_sankey_model(metrics)
    shown = build_sankey_model(metrics, allow_negative_diff=True)

    assert DEFICIT_LABEL not in hidden.node_labels
    deficit = shown.node_labels.index(DEFICIT_LABEL)
    budget = shown.node_labels.index(MIDDLE_LABEL)
    [link] = [link for link in shown.links if link.source == deficit]
    assert link.target == budget
    assert link.value == Decimal("50")


def test_build_plotly_figure_uses_model_links():
    metrics = _metrics(income=[("Salary", "100")], expenses=[("Rent", "40")])
    model = build_sankey_model(metrics)

    figure = build_plotly_figure(model)

    sankey = figure.data[0]
    assert list(sankey.node.label) == model.node_labels
    assert list(sankey.link.value) == [100.0, 40.0, 60.0]
