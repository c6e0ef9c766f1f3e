"""Income to expense Sankey for the Analytics page.

Pure helpers turn ``DashboardMetrics`` into a ``SankeyModel`` and then into
a Plotly figure. Income categories feed a central budget node which fans
out to expense categories; a surplus goes to ``Savings`` and, on request,
a shortfall enters from ``Deficit``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal
from typing import TYPE_CHECKING

from src.domain.models import DashboardMetrics, TransactionType

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


LEFT_PREFIX = "L:"
MIDDLE_PREFIX = "M:"
RIGHT_PREFIX = "R:"

MIDDLE_LABEL = "Budget"
SAVINGS_LABEL = "Savings"
DEFICIT_LABEL = "Deficit"

MIDDLE_KEY = f"{MIDDLE_PREFIX}BUDGET"
SAVINGS_KEY = f"{RIGHT_PREFIX}SAVINGS"
DEFICIT_KEY = f"{LEFT_PREFIX}DEFICIT"

SIDE_COLORS = {
    "L": "rgba(46,139,87,0.85)",
    "M": "rgba(90,90,90,0.85)",
    "R": "rgba(205,92,92,0.85)",
}


Side = Literal["L", "M", "R"]


@dataclass(frozen=True)
class SankeyLink:
    """Sankey link edge."""

    source: int
    target: int
    value: Decimal


@dataclass(frozen=True)
class SankeyModel:
    """Model used by the UI to render a Sankey with stable indices."""

    node_labels: list[str]
    node_keys: list[str]
    links: list[SankeyLink]
    side_by_key: dict[str, Side]


@dataclass
class _NodeRegistry:
    """Assigns stable indices to prefixed node keys."""

    keys: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    sides: dict[str, Side] = field(default_factory=dict)

    def add(self, key: str, label: str, side: Side) -> int:
        if key not in self.sides:
            self.keys.append(key)
            self.labels.append(label)
            self.sides[key] = side
        return self.keys.index(key)


def _category_totals(
    metrics: DashboardMetrics,
    transaction_type: TransactionType,
) -> dict[str, Decimal]:
    """Positive totals per category of one flow direction, first-seen order."""
    totals: dict[str, Decimal] = {}
    for item in metrics.category_breakdown:
        if item.type == transaction_type and item.amount > 0:
            totals[item.category] = (
                totals.get(item.category, Decimal("0")) + item.amount
            )
    return totals


def build_sankey_model(
    metrics: DashboardMetrics,
    allow_negative_diff: bool = False,
) -> SankeyModel:
    """Build a stable Sankey model from dashboard metrics.

    Args:
        metrics: Metrics carrying the income/expense category breakdown.
        allow_negative_diff: If true, show a "Deficit" node feeding the
            budget when expenses exceed income.

    Returns:
        SankeyModel: Nodes and links ready for plotting.
    """
    nodes = _NodeRegistry()
    links: list[SankeyLink] = []

    incoming = _category_totals(metrics, TransactionType.INCOME)
    sources = {
        category: nodes.add(f"{LEFT_PREFIX}{category}", category, "L")
        for category in incoming
    }
    budget = nodes.add(MIDDLE_KEY, MIDDLE_LABEL, "M")
    for category, amount in incoming.items():
        links.append(SankeyLink(sources[category], budget, amount))

    for category, amount in _category_totals(
        metrics,
        TransactionType.EXPENSE,
    ).items():
        target = nodes.add(f"{RIGHT_PREFIX}{category}", category, "R")
        links.append(SankeyLink(budget, target, amount))

    diff = metrics.net_cashflow
    if diff > 0:
        savings = nodes.add(SAVINGS_KEY, SAVINGS_LABEL, "R")
        links.append(SankeyLink(budget, savings, diff))
    elif diff < 0 and allow_negative_diff:
        deficit = nodes.add(DEFICIT_KEY, DEFICIT_LABEL, "L")
        links.append(SankeyLink(deficit, budget, -diff))

    return SankeyModel(
        node_labels=nodes.labels,
        node_keys=nodes.keys,
        links=links,
        side_by_key=nodes.sides,
    )


def _column_positions(model: SankeyModel) -> tuple[list[float], list[float]]:
    """Pin left, middle and right nodes to three evenly spaced columns."""
    counts = {"L": 0, "R": 0}
    for side in model.side_by_key.values():
        if side in counts:
            counts[side] += 1
    seen = {"L": 0, "R": 0}
    xs: list[float] = []
    ys: list[float] = []
    for key in model.node_keys:
        side = model.side_by_key.get(key, "M")
        if side == "M":
            xs.append(0.5)
            ys.append(0.5)
            continue
        seen[side] += 1
        xs.append(0.02 if side == "L" else 0.98)
        ys.append(seen[side] / (counts[side] + 1))
    return xs, ys


def build_plotly_figure(model: SankeyModel) -> "go.Figure":
    """Render the model with nodes pinned to their columns."""
    import plotly.graph_objects as go

    xs, ys = _column_positions(model)
    colors = [
        SIDE_COLORS[model.side_by_key.get(key, "M")]
        for key in model.node_keys
    ]
    fig = go.Figure(
        data=[
            go.Sankey(
                arrangement="fixed",
                node=dict(
                    label=model.node_labels,
                    x=xs,
                    y=ys,
                    color=colors,
                    pad=14,
                    thickness=14,
                ),
                link=dict(
                    source=[link.source for link in model.links],
                    target=[link.target for link in model.links],
                    value=[float(link.value) for link in model.links],
                ),
            )
        ]
    )
    fig.update_layout(height=480, margin=dict(l=10, r=10, t=10, b=10))
    return fig


__all__ = [
    "SankeyLink",
    "SankeyModel",
    "build_sankey_model",
    "build_plotly_figure",
    "MIDDLE_LABEL",
    "SAVINGS_LABEL",
    "DEFICIT_LABEL",
]
