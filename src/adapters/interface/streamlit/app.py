"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal, InvalidOperation

import streamlit as st
import altair as alt

from src.adapters.interface.streamlit.sankey_cashflow import (
    build_plotly_figure,
    build_sankey_model,
)
from src.application.use_cases.export_transactions import (
    ExportTransactionsUseCase,
)
from src.application.use_cases.record_transaction import TransactionDraft
from src.domain.constants import ALL_MEMBERS_TOKEN
from src.domain.models import (
    AssetType,
    GrowthPoint,
    Holding,
    Member,
    MemberSelection,
    MonthlyCashflow,
    Platform,
    PortfolioSnapshot,
    SIPSummary,
    Transaction,
    TransactionType,
)
from src.domain.policies import visible_members
from src.domain.services import (
    compute_asset_activity,
    sort_chronologically,
)
from src.infrastructure.container import (
    build_delete_transaction_use_case,
    build_members_repository,
    build_portfolio_snapshot_use_case,
    build_record_transaction_use_case,
    build_sip_schedules_use_case,
    build_update_price_use_case,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import FinanceSettings


PAGES = ["Dashboard", "Portfolio", "SIP", "Analytics", "Transactions"]
USER_ERRORS = (ValueError, PermissionError, LookupError)


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Return whether numpy/pandas are importable enough for Altair."""
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Altair dependencies are missing: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (no ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (no Timestamp)."
    return True, None


def _fetch_snapshot(member_token: str) -> PortfolioSnapshot:
    """Fetch the derived portfolio snapshot for a member selection."""
    settings = FinanceSettings.from_env()
    use_case = build_portfolio_snapshot_use_case(settings)
    return use_case.execute(
        settings.viewer(),
        MemberSelection.parse(member_token),
    )


@st.cache_data(show_spinner=False)
def _load_snapshot(
    member_token: str,
    schema_version: int = 1,
) -> PortfolioSnapshot:
    """Cached wrapper around _fetch_snapshot."""
    _ = schema_version
    return _fetch_snapshot(member_token)


def _fetch_members() -> list[Member]:
    """Fetch the members the signed-in user may select."""
    settings = FinanceSettings.from_env()
    members = build_members_repository().fetch_members(
        settings.family_group_id
    )
    return visible_members(settings.viewer(), members)


@st.cache_data(show_spinner=False)
def _load_members() -> list[Member]:
    """Cached wrapper around _fetch_members."""
    return _fetch_members()


def _refresh() -> None:
    """Drop cached reads after a write so the next run re-derives."""
    st.cache_data.clear()


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = {"INR": "₹", "EUR": "€", "USD": "$"}.get(
        currency_code,
        f"{currency_code} ",
    )
    return f"{symbol}{value:,.2f}"


def _format_delta(value: Decimal) -> str:
    """Format delta values for display."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:,.2f}"


def _format_percent(value: Decimal) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"


def _parse_decimal(raw: float | str | None) -> Decimal | None:
    """Convert a widget value into a Decimal, None when unparseable."""
    if raw is None:
        return None
    try:
        return Decimal(str(raw))
    except InvalidOperation:
        return None


def _member_label(token: str, members: Sequence[Member]) -> str:
    if token == ALL_MEMBERS_TOKEN:
        return "All members"
    names = {member.id: member.name for member in members}
    return names.get(token, token)


def _select_member(settings: FinanceSettings) -> str:
    """Render the sidebar member selector and return its token."""
    viewer = settings.viewer()
    if not viewer.is_admin:
        return viewer.user_id
    members = _load_members()
    options = [ALL_MEMBERS_TOKEN] + [member.id for member in members]
    return st.sidebar.selectbox(
        "Member",
        options=options,
        index=0,
        format_func=lambda token: _member_label(token, members),
    )


def _holdings_rows(
    holdings: Sequence[Holding],
    currency_code: str,
) -> list[dict[str, str]]:
    return [
        {
            "Asset": holding.asset_name,
            "Type": holding.asset_type.value,
            "Quantity": f"{holding.quantity:,.4f}",
            "Avg Price": _format_currency(holding.avg_price, currency_code),
            "Current Price": _format_currency(
                holding.current_price,
                currency_code,
            ),
            "Invested": _format_currency(
                holding.total_invested,
                currency_code,
            ),
            "Value": _format_currency(holding.current_value, currency_code),
            "Gain/Loss": _format_delta(holding.gain_loss),
            "Gain %": _format_percent(holding.gain_loss_percent),
        }
        for holding in holdings
    ]


def _sip_rows(
    summaries: Sequence[SIPSummary],
    currency_code: str,
) -> list[dict[str, str]]:
    return [
        {
            "SIP": summary.sip_id,
            "Fund": summary.asset_name,
            "Units": f"{summary.total_units:,.4f}",
            "Avg NAV": _format_currency(summary.avg_nav, currency_code),
            "Latest NAV": _format_currency(summary.latest_nav, currency_code),
            "Invested": _format_currency(
                summary.total_invested,
                currency_code,
            ),
            "Value": _format_currency(summary.current_value, currency_code),
            "Gain %": _format_percent(summary.gain_percent),
            "Last Payment": summary.last_date.isoformat(),
        }
        for summary in summaries
    ]


def _newest_first(transactions: Sequence[Transaction]) -> list[Transaction]:
    return sort_chronologically(transactions)[::-1]


def _transaction_rows(
    transactions: Sequence[Transaction],
    currency_code: str,
) -> list[dict[str, str]]:
    return [
        {
            "Date": txn.date.isoformat(),
            "Type": txn.transaction_type.value,
            "Asset": txn.asset_name,
            "Quantity": f"{txn.quantity:,.4f}",
            "Price": _format_currency(txn.price, currency_code),
            "Amount": _format_currency(txn.amount, currency_code),
            "Platform": txn.platform.value,
            "Category": txn.category or "—",
            "Member": txn.member_id,
            "Notes": txn.notes,
        }
        for txn in transactions
    ]


def _prepare_donut_chart_data(
    items: Sequence[tuple[str, Decimal]],
    currency_code: str,
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        items: ``(label, amount)`` pairs to chart.
        currency_code: Currency used for the amount labels.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(
        (item for item in items if item[1] > 0),
        key=lambda item: item[1],
        reverse=True,
    )
    top_items = sorted_items[:max_categories]
    other_amount = sum(
        (amount for _label, amount in sorted_items[max_categories:]),
        start=Decimal("0"),
    )
    if other_amount != 0:
        top_items = [*top_items, ("Other", other_amount)]
    total_amount = sum(
        (amount for _label, amount in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for label, amount in top_items:
        share = (
            (amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": label,
                "amount": float(amount),
                "amount_label": _format_currency(amount, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _render_donut_chart(
    items: Sequence[tuple[str, Decimal]],
    title: str,
    currency_code: str,
    max_categories: int = 6,
    chart_size: int = 300,
    palette: Sequence[str] | None = None,
) -> None:
    """Render a donut chart of amounts by label.

    Args:
        items: ``(label, amount)`` pairs to chart.
        title: Chart title to display above the donut.
        currency_code: Currency used for the amount labels.
        max_categories: Maximum categories before grouping into Other.
        chart_size: Width/height for the chart canvas.
        palette: Optional color palette override.
    """
    data, _total = _prepare_donut_chart_data(
        items,
        currency_code,
        max_categories=max_categories,
    )
    st.subheader(title)
    if not data:
        st.info("No amounts available for the chart.")
        return
    palette_scale = list(
        palette
        or [
            "#1b9aaa",
            "#2e7d32",
            "#f4a261",
            "#e76f51",
            "#457b9d",
            "#f6c453",
            "#6c8ead",
            "#a0c4ff",
        ]
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
        stroke="#0f1115",
        strokeWidth=2,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=palette_scale),
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.25)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(text="amount_label:N")
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart, width="stretch")


def _growth_chart_data(
    points: Sequence[GrowthPoint],
) -> list[dict[str, str | float]]:
    """Flatten growth points into one row per date and series."""
    data: list[dict[str, str | float]] = []
    for point in points:
        data.append(
            {
                "date": point.date.isoformat(),
                "series": "Invested",
                "value": float(point.invested),
            }
        )
        data.append(
            {
                "date": point.date.isoformat(),
                "series": "Current",
                "value": float(point.current),
            }
        )
    return data


def _monthly_chart_data(
    months: Sequence[MonthlyCashflow],
) -> list[dict[str, str | float]]:
    """Flatten monthly totals into one row per month and flow kind."""
    data: list[dict[str, str | float]] = []
    for month in months:
        label = month.month.strftime("%b %Y")
        for kind, amount in (
            ("Income", month.income),
            ("Expense", month.expense),
            ("Investment", month.investment),
        ):
            data.append(
                {
                    "month": label,
                    "sort_key": month.month.isoformat(),
                    "kind": kind,
                    "amount": float(amount),
                }
            )
    return data


def _render_growth_chart(points: Sequence[GrowthPoint]) -> None:
    st.subheader("Investment Growth")
    if not points:
        st.info("No investment activity yet.")
        return
    chart = alt.Chart(
        alt.Data(values=_growth_chart_data(points))
    ).mark_line(point=True).encode(
        x=alt.X("date:T", title=None),
        y=alt.Y("value:Q", title=None),
        color=alt.Color("series:N", legend=alt.Legend(orient="bottom")),
        tooltip=["date:T", "series:N", alt.Tooltip("value:Q", format=",.2f")],
    )
    st.altair_chart(chart, width="stretch")


def _render_monthly_chart(months: Sequence[MonthlyCashflow]) -> None:
    st.subheader("Monthly Cash Flow")
    if not months:
        st.info("No monthly activity yet.")
        return
    chart = alt.Chart(
        alt.Data(values=_monthly_chart_data(months))
    ).mark_bar().encode(
        x=alt.X("month:N", sort=alt.SortField("sort_key"), title=None),
        xOffset="kind:N",
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "kind:N",
            scale=alt.Scale(
                domain=["Income", "Expense", "Investment"],
                range=["#2e7d32", "#e76f51", "#457b9d"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=["month:N", "kind:N", alt.Tooltip("amount:Q", format=",.2f")],
    )
    st.altair_chart(chart, width="stretch")


def _render_dashboard(snapshot: PortfolioSnapshot) -> None:
    metrics = snapshot.metrics
    currency = snapshot.currency_code
    worth_col, invested_col, gain_col, cash_col = st.columns(4)
    worth_col.metric(
        "Net Worth",
        _format_currency(metrics.total_current_value, currency),
    )
    invested_col.metric(
        "Invested",
        _format_currency(metrics.total_invested, currency),
    )
    gain_col.metric(
        "Gain/Loss",
        _format_currency(metrics.total_gain_loss, currency),
        _format_percent(metrics.overall_gain_percent),
    )
    cash_col.metric(
        "Net Cash Flow",
        _format_currency(metrics.net_cashflow, currency),
        f"Savings rate {metrics.savings_rate:.1f}%",
    )

    ok, message = _check_altair_dependencies()
    if not ok:
        st.error(message)
        return
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_growth_chart(snapshot.growth)
    with chart_right:
        _render_donut_chart(
            [
                (item.asset_type.value, item.value)
                for item in metrics.asset_allocation
            ],
            "Asset Allocation",
            currency,
        )
    st.subheader("Recent Transactions")
    st.dataframe(
        _transaction_rows(_newest_first(snapshot.transactions)[:5], currency),
        width="stretch",
        hide_index=True,
    )


def _render_portfolio(
    snapshot: PortfolioSnapshot,
    settings: FinanceSettings,
) -> None:
    currency = snapshot.currency_code
    st.subheader("Holdings")
    if not snapshot.holdings:
        st.info("No open holdings. Record a buy to get started.")
        return
    st.dataframe(
        _holdings_rows(snapshot.holdings, currency),
        width="stretch",
        hide_index=True,
    )

    asset_names = [holding.asset_name for holding in snapshot.holdings]
    with st.form("update_price"):
        st.markdown("**Update price**")
        asset_name = st.selectbox("Asset", options=asset_names)
        price = st.number_input("Current price", min_value=0.0, step=0.01)
        submitted = st.form_submit_button("Save price")
    if submitted:
        try:
            build_update_price_use_case(settings).execute(
                asset_name,
                _parse_decimal(price) or Decimal("0"),
            )
        except USER_ERRORS as exc:
            st.error(str(exc))
        else:
            st.success(f"Price updated for {asset_name}.")
            _refresh()

    selected = st.selectbox("Asset activity", options=asset_names)
    activity = compute_asset_activity(selected, snapshot.transactions)
    bought_col, sold_col = st.columns(2)
    bought_col.metric(
        "Total bought",
        _format_currency(activity.total_bought, currency),
    )
    sold_col.metric(
        "Total sold",
        _format_currency(activity.total_sold, currency),
    )
    st.dataframe(
        _transaction_rows(activity.transactions, currency),
        width="stretch",
        hide_index=True,
    )


def _render_sip(
    snapshot: PortfolioSnapshot,
    settings: FinanceSettings,
) -> None:
    currency = snapshot.currency_code
    st.subheader("SIP Performance")
    if snapshot.sip_summaries:
        st.dataframe(
            _sip_rows(snapshot.sip_summaries, currency),
            width="stretch",
            hide_index=True,
        )
    else:
        st.info("No SIP transactions recorded yet.")

    use_case = build_sip_schedules_use_case(settings)
    viewer = settings.viewer()
    upcoming = use_case.upcoming(date.today())
    st.subheader("Upcoming SIPs")
    st.dataframe(
        [
            {
                "Fund": item.schedule.asset_name,
                "Amount": _format_currency(item.schedule.amount, currency),
                "Due": item.due_date.isoformat(),
                "Member": item.schedule.member_id,
            }
            for item in upcoming
        ],
        width="stretch",
        hide_index=True,
    )

    with st.form("add_sip_schedule"):
        st.markdown("**New SIP schedule**")
        asset_name = st.text_input("Fund name")
        amount = st.number_input("Monthly amount", min_value=0.0, step=100.0)
        day = st.number_input("Day of month", min_value=1, max_value=31)
        start = st.date_input("Start date", value=date.today())
        submitted = st.form_submit_button("Add schedule")
    if submitted:
        try:
            use_case.add(
                viewer,
                asset_name,
                _parse_decimal(amount) or Decimal("0"),
                int(day),
                start,
            )
        except USER_ERRORS as exc:
            st.error(str(exc))
        else:
            st.success(f"Schedule added for {asset_name}.")
            _refresh()

    if not upcoming:
        return
    by_id = {item.schedule.id: item.schedule for item in upcoming}
    with st.form("log_sip_payment"):
        st.markdown("**Log SIP payment**")
        schedule_id = st.selectbox(
            "Schedule",
            options=list(by_id),
            format_func=lambda key: by_id[key].asset_name,
        )
        nav = st.number_input("NAV", min_value=0.0, step=0.01)
        paid_on = st.date_input("Payment date", value=date.today())
        log_clicked = st.form_submit_button("Log payment")
        delete_clicked = st.form_submit_button("Delete schedule")
    if log_clicked:
        try:
            use_case.log_payment(
                viewer,
                by_id[schedule_id],
                _parse_decimal(nav) or Decimal("0"),
                paid_on,
                holdings=snapshot.holdings,
            )
        except USER_ERRORS as exc:
            st.error(str(exc))
        else:
            st.success("SIP payment logged.")
            _refresh()
    if delete_clicked:
        try:
            use_case.delete(viewer, schedule_id)
        except USER_ERRORS as exc:
            st.error(str(exc))
        else:
            st.success("Schedule deleted.")
            _refresh()


def _render_analytics(snapshot: PortfolioSnapshot) -> None:
    metrics = snapshot.metrics
    currency = snapshot.currency_code
    income_col, expense_col, rate_col = st.columns(3)
    income_col.metric(
        "Income",
        _format_currency(metrics.total_income, currency),
    )
    expense_col.metric(
        "Expenses",
        _format_currency(metrics.total_expenses, currency),
        delta_color="inverse",
    )
    rate_col.metric("Savings Rate", f"{metrics.savings_rate:.1f}%")

    ok, message = _check_altair_dependencies()
    if not ok:
        st.error(message)
        return
    _render_monthly_chart(snapshot.monthly_cashflow)
    income_chart, expense_chart = st.columns(2)
    with income_chart:
        _render_donut_chart(
            [
                (item.category, item.amount)
                for item in metrics.category_breakdown
                if item.type == TransactionType.INCOME
            ],
            "Income by Category",
            currency,
        )
    with expense_chart:
        _render_donut_chart(
            [
                (item.category, item.amount)
                for item in metrics.category_breakdown
                if item.type == TransactionType.EXPENSE
            ],
            "Expenses by Category",
            currency,
        )
    st.subheader("Cash Flow")
    if not metrics.category_breakdown:
        st.info("No income or expenses recorded yet.")
        return
    model = build_sankey_model(metrics, allow_negative_diff=True)
    st.plotly_chart(build_plotly_figure(model), width="stretch")


def _render_add_transaction(settings: FinanceSettings) -> None:
    viewer = settings.viewer()
    with st.form("add_transaction"):
        st.markdown("**Add transaction**")
        txn_type = st.selectbox(
            "Type",
            options=list(TransactionType),
            format_func=lambda item: item.value,
        )
        txn_date = st.date_input("Date", value=date.today())
        asset_name = st.text_input("Asset name")
        asset_type = st.selectbox(
            "Asset type",
            options=list(AssetType),
            format_func=lambda item: item.value,
        )
        platform = st.selectbox(
            "Platform",
            options=list(Platform),
            index=1,
            format_func=lambda item: item.value,
        )
        quantity = st.number_input("Quantity", min_value=0.0, value=1.0)
        price = st.number_input("Price / Amount", min_value=0.0, step=0.01)
        category = st.text_input("Category (income/expense)")
        sip_id = st.text_input("SIP id (SIP only)")
        notes = st.text_input("Notes")
        member_id = (
            st.text_input("Member id", value=viewer.user_id)
            if viewer.is_admin
            else None
        )
        submitted = st.form_submit_button("Save")
    if not submitted:
        return
    draft = TransactionDraft(
        transaction_type=txn_type,
        date=txn_date,
        price=_parse_decimal(price) or Decimal("0"),
        quantity=_parse_decimal(quantity),
        asset_name=asset_name,
        asset_type=asset_type,
        platform=platform,
        category=category or None,
        sip_id=sip_id or None,
        notes=notes,
        member_id=member_id,
    )
    try:
        build_record_transaction_use_case(settings).execute(viewer, draft)
    except USER_ERRORS as exc:
        st.error(str(exc))
    else:
        st.success("Transaction recorded.")
        _refresh()


def _render_transactions(
    snapshot: PortfolioSnapshot,
    settings: FinanceSettings,
) -> None:
    currency = snapshot.currency_code
    type_filter = st.selectbox(
        "Filter by type",
        options=["All"] + [item.value for item in TransactionType],
        index=0,
    )
    shown = [
        txn
        for txn in _newest_first(snapshot.transactions)
        if type_filter == "All" or txn.transaction_type.value == type_filter
    ]
    st.caption(f"{len(shown)} transactions shown")
    st.dataframe(
        _transaction_rows(shown, currency),
        width="stretch",
        hide_index=True,
        height=420,
    )
    try:
        csv_text = ExportTransactionsUseCase().execute(shown)
    except ValueError:
        st.caption("Nothing to export.")
    else:
        st.download_button(
            "Export CSV",
            data=csv_text,
            file_name=f"transactions_{date.today().isoformat()}.csv",
            mime="text/csv",
        )

    _render_add_transaction(settings)

    if not shown:
        return
    by_id = {txn.id: txn for txn in shown}
    to_delete = st.selectbox(
        "Delete transaction",
        options=list(by_id),
        format_func=lambda key: (
            f"{by_id[key].date} {by_id[key].transaction_type.value} "
            f"{by_id[key].asset_name}"
        ),
    )
    if st.button("Delete"):
        try:
            build_delete_transaction_use_case().execute(
                settings.viewer(),
                to_delete,
            )
        except USER_ERRORS as exc:
            st.error(str(exc))
        else:
            st.success("Transaction deleted.")
            _refresh()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Family Finance", layout="wide")
    st.title("Family Finance")

    settings = FinanceSettings.from_env()
    page = st.sidebar.selectbox("Page", PAGES)
    member_token = _select_member(settings)
    get_usage_logger().info(
        f"page={page} user={settings.user_id} member={member_token}"
    )
    snapshot = _load_snapshot(member_token, schema_version=1)

    if page == "Dashboard":
        if not snapshot.transactions:
            st.warning(
                "No transactions yet. Add one on the Transactions page."
            )
            return
        _render_dashboard(snapshot)
    elif page == "Portfolio":
        _render_portfolio(snapshot, settings)
    elif page == "SIP":
        _render_sip(snapshot, settings)
    elif page == "Analytics":
        _render_analytics(snapshot)
    else:
        _render_transactions(snapshot, settings)


if __name__ == "__main__":  # pragma: no cover
    main()
