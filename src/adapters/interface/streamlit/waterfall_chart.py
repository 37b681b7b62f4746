"""Net worth waterfall presentation logic for the Streamlit UI.

Pure transformations from ``WaterfallStep`` records produced by the chart
builder to bar definitions and a Plotly figure. No IO happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal
from typing import TYPE_CHECKING

from src.domain.constants import CAPITAL_GAINS, INTEREST_EARNED, SAVINGS_FROM_INCOME
from src.domain.models.finance import WaterfallStep

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


STARTING_LABEL = "Starting Net Worth"
OTHER_LABEL = "Other"
ENDING_LABEL = "Ending Net Worth"


@dataclass(frozen=True)
class WaterfallBar:
    """One bar of the waterfall.

    Attributes:
        label: Axis label.
        measure: Plotly measure: absolute, relative or total.
        value: Bar value; ignored by Plotly for totals.
    """

    label: str
    measure: Literal["absolute", "relative", "total"]
    value: Decimal


def summarize_steps(steps: list[WaterfallStep]) -> WaterfallStep | None:
    """Collapse consecutive monthly steps into one bridge.

    The start comes from the first step and the end from the last; the
    contributions are summed, so the bridge identity still holds.
    """
    if not steps:
        return None
    first, last = steps[0], steps[-1]
    zero = Decimal("0")
    return WaterfallStep(
        month=last.month,
        label=first.label if len(steps) == 1 else f"{first.label} - {last.label}",
        starting_balance=first.starting_balance,
        savings_from_income=sum((s.savings_from_income for s in steps), zero),
        interest_earned=sum((s.interest_earned for s in steps), zero),
        capital_gains=sum((s.capital_gains for s in steps), zero),
        other=sum((s.other for s in steps), zero),
        ending_balance=last.ending_balance,
    )


def build_waterfall_bars(step: WaterfallStep) -> list[WaterfallBar]:
    return [
        WaterfallBar(STARTING_LABEL, "absolute", step.starting_balance),
        WaterfallBar(SAVINGS_FROM_INCOME, "relative", step.savings_from_income),
        WaterfallBar(INTEREST_EARNED, "relative", step.interest_earned),
        WaterfallBar(CAPITAL_GAINS, "relative", step.capital_gains),
        WaterfallBar(OTHER_LABEL, "relative", step.other),
        WaterfallBar(ENDING_LABEL, "total", step.ending_balance),
    ]


def build_waterfall_figure(
    step: WaterfallStep,
    currency_code: str,
) -> "go.Figure":
    """Build a Plotly waterfall for one bridge.

    Args:
        step: Bridge to plot.
        currency_code: Currency shown in hover labels.

    Returns:
        Plotly figure.
    """
    bars = build_waterfall_bars(step)

    import plotly.graph_objects as go

    fig = go.Figure(
        data=[
            go.Waterfall(
                orientation="v",
                x=[bar.label for bar in bars],
                measure=[bar.measure for bar in bars],
                y=[float(bar.value) for bar in bars],
                text=[f"{bar.value:,.0f} {currency_code}" for bar in bars],
                textposition="outside",
                connector=dict(line=dict(color="rgba(0,0,0,0.25)", width=1)),
                increasing=dict(marker=dict(color="#22c55e")),
                decreasing=dict(marker=dict(color="#ef4444")),
                totals=dict(marker=dict(color="#3b82f6")),
            )
        ]
    )
    fig.update_layout(
        title=step.label,
        margin=dict(l=8, r=8, t=40, b=8),
        height=420,
        showlegend=False,
    )
    return fig


__all__ = [
    "WaterfallBar",
    "summarize_steps",
    "build_waterfall_bars",
    "build_waterfall_figure",
]
