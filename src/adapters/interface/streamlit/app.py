"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from decimal import Decimal

import streamlit as st
import altair as alt

from src.adapters.interface.streamlit.waterfall_chart import (
    build_waterfall_figure,
    summarize_steps,
)
from src.domain.constants import CAPITAL_GAINS, INTEREST_EARNED, SAVINGS_FROM_INCOME
from src.domain.models.accounts import Account, Currency
from src.domain.models.finance import (
    AllocationSlice,
    ChartData,
    ChartPeriod,
    ChartQuery,
    FinancialMetrics,
    NetWorthSummary,
    StaleAccountsReport,
)
from src.infrastructure.container import Container
from src.infrastructure.logging.logger import get_usage_logger


PERIOD_LABELS = {
    "Year to date": ChartPeriod.YTD,
    "Last 12 months": ChartPeriod.ONE_YEAR,
    "All time": ChartPeriod.ALL,
}

CURRENCY_SYMBOLS = {"GBP": "£", "EUR": "€", "USD": "$", "AED": "AED"}


@st.cache_resource(show_spinner=False)
def _container() -> Container:
    """Share one wired container across Streamlit sessions."""
    return Container()


def _fetch_accounts() -> Sequence[Account]:
    """Fetch open accounts in display order."""
    return _container().get_accounts().execute(include_closed=False)


@st.cache_data(show_spinner=False, ttl=60)
def _load_accounts() -> Sequence[Account]:
    """Cached wrapper around _fetch_accounts for Streamlit sessions."""
    return _fetch_accounts()


def _fetch_net_worth_summary(currency_code: str) -> NetWorthSummary:
    return _container().get_net_worth_summary().execute(
        target_currency=currency_code
    )


@st.cache_data(show_spinner=False, ttl=60)
def _load_net_worth_summary(currency_code: str) -> NetWorthSummary:
    """Cached wrapper around _fetch_net_worth_summary."""
    return _fetch_net_worth_summary(currency_code)


def _fetch_financial_metrics(currency_code: str) -> FinancialMetrics:
    return _container().get_financial_metrics().execute(
        target_currency=currency_code
    )


@st.cache_data(show_spinner=False, ttl=60)
def _load_financial_metrics(currency_code: str) -> FinancialMetrics:
    """Cached wrapper around _fetch_financial_metrics."""
    return _fetch_financial_metrics(currency_code)


def _fetch_chart_data(
    period: str,
    currency_code: str,
    owner: str,
) -> ChartData:
    """Build every chart series for the sidebar selection."""
    query = ChartQuery(
        time_period=ChartPeriod(period),
        owner=owner,
        target_currency=Currency(currency_code),
    )
    return _container().get_chart_data().execute(query)


@st.cache_data(show_spinner=False, ttl=60)
def _load_chart_data(period: str, currency_code: str, owner: str) -> ChartData:
    """Cached wrapper around _fetch_chart_data."""
    return _fetch_chart_data(period, currency_code, owner)


def _fetch_stale_accounts() -> StaleAccountsReport:
    return _container().get_stale_accounts().execute()


@st.cache_data(show_spinner=False, ttl=60)
def _load_stale_accounts() -> StaleAccountsReport:
    """Cached wrapper around _fetch_stale_accounts."""
    return _fetch_stale_accounts()


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = CURRENCY_SYMBOLS.get(currency_code, currency_code)
    return f"{symbol}{value:,.2f}"


def _format_delta(value: Decimal) -> str:
    """Format delta values for display."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:,.2f}"


def _format_delta_with_percent(
    delta: Decimal,
    baseline: Decimal,
) -> str:
    """Format delta value with percentage change."""
    if baseline == 0:
        return _format_delta(delta)
    percent = (delta / abs(baseline)) * Decimal("100")
    sign = "+" if percent >= 0 else ""
    return f"{_format_delta(delta)} ({sign}{percent:.2f}%)"


def _owner_options(accounts: Sequence[Account]) -> list[str]:
    owners = sorted({acc.owner for acc in accounts if acc.owner and acc.owner != "all"})
    return ["all", *owners]


def _net_worth_rows(data: ChartData) -> list[dict[str, str | float]]:
    """Flatten net worth points into long-form Altair rows."""
    rows: list[dict[str, str | float]] = []
    for point in data.net_worth_data:
        for series, value in (
            ("Net Worth", point.net_worth),
            ("Assets", point.assets),
            ("Liabilities", -point.liabilities),
        ):
            rows.append(
                {"month": point.month, "series": series, "amount": float(value)}
            )
    return rows


def _source_rows(data: ChartData) -> list[dict[str, str | float]]:
    """Flatten monthly wealth sources into long-form Altair rows."""
    rows: list[dict[str, str | float]] = []
    for item in data.source_data:
        for source, value in (
            (SAVINGS_FROM_INCOME, item.savings_from_income),
            (INTEREST_EARNED, item.interest_earned),
            (CAPITAL_GAINS, item.capital_gains),
        ):
            rows.append(
                {"month": item.month, "source": source, "amount": float(value)}
            )
    return rows


def _prepare_donut_chart_data(
    slices: Sequence[AllocationSlice],
    currency_code: str,
) -> list[dict[str, str | float]]:
    """Prepare donut chart rows from positive allocation slices."""
    return [
        {
            "group": item.group,
            "amount": float(item.amount),
            "amount_label": _format_currency(item.amount, currency_code),
            "share_label": f"{item.share:.1f}%",
        }
        for item in slices
    ]


def _render_summary(summary: NetWorthSummary, data: ChartData) -> None:
    """Render the headline metrics with the change over the window."""
    code = summary.currency_code
    bridge = summarize_steps(data.waterfall_data)
    delta_display = None
    if bridge is not None:
        delta_display = _format_delta_with_percent(
            bridge.ending_balance - bridge.starting_balance,
            bridge.starting_balance,
        )
    assets_col, liabilities_col, net_worth_col = st.columns(3)
    assets_col.metric("Assets", _format_currency(summary.asset_total, code))
    liabilities_col.metric(
        "Liabilities",
        _format_currency(summary.liability_total, code),
    )
    net_worth_col.metric(
        "Net Worth",
        _format_currency(summary.net_worth, code),
        delta_display,
    )
    if summary.rates_pending or data.rates_pending:
        st.caption(
            "Some exchange rates are pending; affected amounts are shown "
            "unconverted."
        )


def _render_financial_metrics(metrics: FinancialMetrics) -> None:
    """Render year-to-date income, spending and savings with all-time help."""
    code = metrics.currency_code
    income_col, spending_col, savings_col = st.columns(3)
    income_col.metric(
        "Income YTD",
        _format_currency(metrics.income_ytd, code),
        help=f"All time: {_format_currency(metrics.income_all_time, code)}",
    )
    spending_col.metric(
        "Expenditure YTD",
        _format_currency(metrics.expenditure_ytd, code),
        help=f"All time: {_format_currency(metrics.expenditure_all_time, code)}",
    )
    savings_rate = (
        None
        if metrics.savings_rate_ytd is None
        else f"{metrics.savings_rate_ytd}% saved"
    )
    savings_col.metric(
        "Savings YTD",
        _format_currency(metrics.savings_ytd, code),
        savings_rate,
        help=f"All time: {_format_currency(metrics.savings_all_time, code)}",
    )
    changes = [
        f"{label} {_format_delta(change)}%"
        for label, change in (
            ("Net worth YTD", metrics.net_worth_change_ytd),
            ("All time", metrics.net_worth_change_all_time),
        )
        if change is not None
    ]
    if changes:
        st.caption(" | ".join(changes))


def _render_net_worth_chart(data: ChartData) -> None:
    rows = _net_worth_rows(data)
    if not rows:
        st.info("No monthly entries yet.")
        return
    chart = alt.Chart(alt.Data(values=rows)).mark_line(point=True).encode(
        x=alt.X("month:O", title=None),
        y=alt.Y("amount:Q", title=data.currency_code),
        color=alt.Color("series:N", legend=alt.Legend(orient="bottom", title=None)),
        tooltip=[
            alt.Tooltip("month:O"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount:Q", format=",.2f"),
        ],
    )
    st.subheader("Net Worth")
    st.altair_chart(chart, width="stretch")


def _render_allocation_chart(
    slices: Sequence[AllocationSlice],
    title: str,
    currency_code: str,
    chart_size: int = 300,
) -> None:
    """Render a donut chart of positive group totals."""
    if not slices:
        st.info("No positive balances to allocate.")
        return
    data = _prepare_donut_chart_data(slices, currency_code)
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "group:N",
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("group:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    ).properties(width=chart_size, height=chart_size)
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def _render_sources_chart(data: ChartData) -> None:
    rows = _source_rows(data)
    if not rows:
        return
    chart = alt.Chart(alt.Data(values=rows)).mark_bar().encode(
        x=alt.X("month:O", title=None),
        y=alt.Y("amount:Q", title=data.currency_code, stack="zero"),
        color=alt.Color("source:N", legend=alt.Legend(orient="bottom", title=None)),
        tooltip=[
            alt.Tooltip("month:O"),
            alt.Tooltip("source:N"),
            alt.Tooltip("amount:Q", format=",.2f"),
        ],
    )
    st.subheader("Wealth Sources")
    st.altair_chart(chart, width="stretch")


def _render_waterfall(data: ChartData) -> None:
    bridge = summarize_steps(data.waterfall_data)
    if bridge is None:
        return
    st.subheader("Net Worth Bridge")
    st.plotly_chart(
        build_waterfall_figure(bridge, data.currency_code),
        width="stretch",
    )


def _render_stale_accounts(report: StaleAccountsReport) -> None:
    if not report.stale_entries:
        return
    st.warning(
        f"{report.missing_account_count} accounts are missing entries for "
        f"{report.missing_month_count} months."
    )
    st.dataframe(
        [
            {
                "Account": item.name,
                "Type": item.account_type.value,
                "Month": item.month,
            }
            for item in report.stale_entries
        ],
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Net Worth Dashboard", layout="wide")
    st.title("Net Worth Dashboard")

    accounts = _load_accounts()
    if not accounts:
        st.warning("No accounts found. Add an account to get started.")
        return

    default_currency = _container().settings.display_currency.value
    currencies = [currency.value for currency in Currency]
    currency_code = st.sidebar.selectbox(
        "Currency",
        currencies,
        index=currencies.index(default_currency),
    )
    period_label = st.sidebar.selectbox("Period", list(PERIOD_LABELS), index=2)
    owner = st.sidebar.selectbox("Owner", _owner_options(accounts))
    get_usage_logger().info(
        f"Dashboard viewed: period={period_label}, currency={currency_code}, "
        f"owner={owner}"
    )

    summary = _load_net_worth_summary(currency_code)
    data = _load_chart_data(PERIOD_LABELS[period_label].value, currency_code, owner)

    _render_summary(summary, data)
    _render_financial_metrics(_load_financial_metrics(currency_code))
    _render_net_worth_chart(data)
    chart_left, chart_right = st.columns(2)
    with chart_left:
        _render_allocation_chart(
            data.type_allocation, "Allocation by Type", data.currency_code
        )
    with chart_right:
        _render_allocation_chart(
            data.category_allocation, "Allocation by Category", data.currency_code
        )
    _render_sources_chart(data)
    _render_waterfall(data)
    _render_stale_accounts(_load_stale_accounts())


if __name__ == "__main__":  # pragma: no cover
    main()
