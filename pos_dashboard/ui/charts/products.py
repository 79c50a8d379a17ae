"""인기 상품 막대 차트."""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from pos_dashboard.analytics.sales import top_selling_products
from pos_dashboard.core.config import CONFIG

from .plotly_helpers import PLOTLY_CONFIG, SERIES_COLORS, apply_common_layout, safe_add_bar


def build_top_products_figure(products: pd.DataFrame) -> go.Figure:
    """판매 수량 기준 가로 막대 차트 (많이 팔린 상품이 위)."""
    fig = go.Figure()
    ordered = products.iloc[::-1]
    safe_add_bar(
        fig,
        x=ordered["orders"],
        y=ordered["name"],
        name="Units sold",
        marker_color=SERIES_COLORS["orders"],
        orientation="h",
    )
    fig = apply_common_layout(fig, height=260, money_axis=False)
    fig.update_layout(showlegend=False, hovermode="y")
    return fig


def render_top_products(transactions: pd.DataFrame, inventory: pd.DataFrame) -> None:
    """인기 상품 차트를 렌더링합니다."""
    products = top_selling_products(transactions, inventory, limit=CONFIG.refresh.top_products)
    if int(products["orders"].sum()) == 0:
        st.caption("No sales recorded yet. Showing your catalogue.")
    st.plotly_chart(build_top_products_figure(products), use_container_width=True, config=PLOTLY_CONFIG)
