"""매출 vs 지출 영역 차트."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from pos_dashboard.analytics.sales import ChartPeriod, sales_expenses_series
from pos_dashboard.core.config import CONFIG

from .plotly_helpers import PLOTLY_CONFIG, SERIES_COLORS, apply_common_layout, safe_add_area

PERIOD_LABELS = {"daily": "Last 7 days", "weekly": "Weekly", "monthly": "Monthly"}


def build_sales_expenses_figure(series: pd.DataFrame) -> go.Figure:
    """
    기간별 매출/지출/이익 시계열로 영역 차트를 만듭니다.

    Args:
        series: sales_expenses_series 결과 (period, sales, expenses, profit)
    """
    fig = go.Figure()
    for column, label in (("sales", "Sales"), ("expenses", "Expenses"), ("profit", "Profit")):
        if column in series.columns:
            safe_add_area(
                fig,
                x=series["period"],
                y=series[column],
                name=label,
                color=SERIES_COLORS[column],
                hovertemplate="%{y:$,.2f}",
            )
    return apply_common_layout(fig)


def render_sales_expenses_chart(
    transactions: pd.DataFrame,
    expenses: pd.DataFrame,
    *,
    now: pd.Timestamp,
    key: str = "sales_expenses_period",
) -> None:
    """기간 선택(일/주/월)과 함께 매출 vs 지출 차트를 렌더링합니다."""
    period: ChartPeriod = st.radio(
        "Period",
        options=list(PERIOD_LABELS),
        format_func=PERIOD_LABELS.get,
        horizontal=True,
        key=key,
        label_visibility="collapsed",
    )
    series = sales_expenses_series(
        transactions,
        expenses,
        period=period,
        now=now,
        days=CONFIG.refresh.chart_days,
        tz=CONFIG.timezone,
    )
    if series.empty or (series[["sales", "expenses"]].sum().sum() == 0):
        st.caption("No sales or expenses recorded for this period yet.")

    st.plotly_chart(
        build_sales_expenses_figure(series), use_container_width=True, config=PLOTLY_CONFIG
    )
