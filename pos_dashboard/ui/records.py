"""
기록 탭 렌더링

레이바이/지출/재고/고객 저장소의 필터 입력, 통계 카드, 필터링된 표를 렌더링합니다.
저장소는 세션마다 하나씩 유지되고, 새 행이 들어오면 set_rows()로 교체됩니다.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st

from pos_dashboard.stores import CustomerStore, ExpenseStore, InventoryStore, LaybyStore

from .kpi import build_grid, build_metric_card, format_currency, format_number, inject_responsive_styles
from .state import get_store

LAYBY_STATUSES = ["all", "active", "partial", "overdue", "completed", "cancelled"]
STOCK_LEVELS = ["all", "in", "low", "out"]
CUSTOMER_STATUSES = ["all", "active", "inactive", "vip"]


def _render_cards(cards: list[str]) -> None:
    inject_responsive_styles()
    st.markdown(build_grid(cards, extra_class="kpi-grid--summary"), unsafe_allow_html=True)


def _visible(frame: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    return frame[[c for c in columns if c in frame.columns]]


def load_store(
    key: str, store_type: type, rows: pd.DataFrame, *, now: Optional[pd.Timestamp] = None
) -> object:
    """세션 저장소를 가져와 최신 행과 기준 시각(now)으로 교체합니다 (필터는 유지)."""
    store = get_store(key, lambda: store_type(now=now))
    store.set_rows(rows, now=now)
    return store


def render_layby_records(store: LaybyStore) -> None:
    search_col, status_col = st.columns([3, 1])
    search = search_col.text_input("Search laybys", value=store.filters.search, key="layby_search")
    status = status_col.selectbox(
        "Status", LAYBY_STATUSES, index=LAYBY_STATUSES.index(store.filters.status), key="layby_status"
    )
    store.set_filters(search=search, status=status)

    stats = store.stats
    _render_cards(
        [
            build_metric_card("Total Laybys", format_number(stats.total), subtitle=f"{stats.completed} completed"),
            build_metric_card("Active", format_number(stats.active), subtitle=f"{stats.overdue} overdue"),
            build_metric_card("Outstanding", format_currency(stats.outstanding_balance)),
            build_metric_card("Deposits", format_currency(stats.deposits_collected)),
        ]
    )
    st.dataframe(
        _visible(
            store.filtered,
            ["layby_number", "customer_name", "customer_phone", "total_amount", "balance_remaining", "due_date", "status"],
        ),
        use_container_width=True,
        hide_index=True,
    )


def render_expense_records(store: ExpenseStore) -> None:
    search_col, status_col = st.columns([3, 1])
    search = search_col.text_input("Search expenses", value=store.filters.search, key="expense_search")
    statuses = ["all", *sorted(s for s in store.rows["status"].dropna().astype(str).unique())]
    status = status_col.selectbox("Status", statuses, key="expense_status")
    store.set_filters(search=search, status=None if status == "all" else status)

    stats = store.stats
    _render_cards(
        [
            build_metric_card("This Month", format_currency(stats.monthly_total), subtitle=f"{stats.count} expenses"),
            build_metric_card("This Year", format_currency(stats.yearly_total)),
            build_metric_card("Pending", format_currency(stats.pending_amount)),
            build_metric_card("Tax Deductible", format_currency(stats.tax_deductible)),
        ]
    )
    st.dataframe(
        _visible(
            store.filtered,
            ["expense_number", "title", "description", "vendor_name", "category", "amount", "status", "expense_date"],
        ),
        use_container_width=True,
        hide_index=True,
    )


def render_inventory_records(store: InventoryStore) -> None:
    search_col, level_col = st.columns([3, 1])
    search = search_col.text_input("Search products", value=store.filters.search, key="inventory_search")
    level = level_col.selectbox(
        "Stock level", STOCK_LEVELS, index=STOCK_LEVELS.index(store.filters.stock_level), key="inventory_level"
    )
    store.set_filters(search=search, stock_level=level)

    stats = store.stats
    _render_cards(
        [
            build_metric_card("Products", format_number(stats.total_products)),
            build_metric_card("Low Stock", format_number(stats.low_stock)),
            build_metric_card("Out of Stock", format_number(stats.out_of_stock)),
            build_metric_card("Stock Value", format_currency(stats.total_value)),
        ]
    )
    st.dataframe(
        _visible(store.filtered, ["name", "sku", "category", "price", "stock_quantity", "stock_level"]),
        use_container_width=True,
        hide_index=True,
    )


def render_customer_records(store: CustomerStore) -> None:
    search_col, status_col = st.columns([3, 1])
    search = search_col.text_input("Search customers", value=store.filters.search, key="customer_search")
    status = status_col.selectbox(
        "Status",
        CUSTOMER_STATUSES,
        index=CUSTOMER_STATUSES.index(store.filters.status),
        key="customer_status",
    )
    store.set_filters(search=search, status=status)

    stats = store.stats
    _render_cards(
        [
            build_metric_card("Customers", format_number(stats.total)),
            build_metric_card("Active", format_number(stats.active)),
            build_metric_card("VIP", format_number(stats.vip)),
            build_metric_card("Average Spend", format_currency(stats.average_spent)),
        ]
    )
    st.dataframe(
        _visible(
            store.filtered,
            ["name", "email", "phone", "status", "total_spent", "total_orders", "last_order_date"],
        ),
        use_container_width=True,
        hide_index=True,
    )
