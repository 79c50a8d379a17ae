"""
POS 대시보드 메인 엔트리 포인트

실행: streamlit run pos_app.py

구성:
- 사이드바: 매장 ID, 일 매출 목표, 새로 고침, 알림 규칙 on/off
- 탭: 개요 / 비즈니스 지표 / 알림 / 위젯 / 기록
- 지표는 5분, 알림은 2분마다 fragment 단위로 자동 갱신
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import pandas as pd
import streamlit as st

# 로깅 설정
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from pos_dashboard.alerts import generate_business_alerts
from pos_dashboard.analytics import financial_health, inventory_retail_value
from pos_dashboard.common.performance import global_metrics, measure_time_context
from pos_dashboard.core.config import CONFIG, SupabaseSettings, load_supabase_settings
from pos_dashboard.data_sources import (
    ensure_snapshot,
    fetch_expense_summary,
    fetch_layby_summary,
    fetch_recent_orders,
    fetch_transaction_summary,
    get_client,
    load_customers,
    load_dashboard_rows,
    request_refresh,
    today_key,
)
from pos_dashboard.domain.dates import local_now
from pos_dashboard.domain.exceptions import ConfigError
from pos_dashboard.stores import CustomerStore, ExpenseStore, InventoryStore, LaybyStore
from pos_dashboard.ui import (
    customers_widget,
    expenses_widget,
    financial_health_cards,
    get_alert_board,
    get_alert_rules,
    handle_domain_errors,
    inventory_widget,
    layby_widget,
    load_store,
    render_alert_panel,
    render_business_metrics,
    render_customer_records,
    render_expense_records,
    render_inventory_records,
    render_layby_records,
    render_rule_settings,
    render_sales_expenses_chart,
    render_top_products,
    render_widgets,
    sales_widget,
    set_alert_rules,
    transactions_widget,
)
from pos_dashboard.ui.kpi import build_grid, inject_responsive_styles


def _load_settings() -> Optional[SupabaseSettings]:
    try:
        return load_supabase_settings(st.secrets)
    except ConfigError as e:
        logger.error(f"Supabase settings missing: {e}")
        st.error(f"❌ {e}")
        return None


def _render_sidebar(settings: SupabaseSettings) -> tuple[str, float]:
    """사이드바 입력값 (매장 ID, 일 매출 목표)을 반환합니다."""
    with st.sidebar:
        st.header("🏪 Store")
        if st.button("🔄 Refresh data", key="sidebar_refresh", use_container_width=True):
            request_refresh()
            load_dashboard_rows.clear()
            load_customers.clear()
            st.rerun()

        store_id = st.text_input("Store ID", value=settings.store_id or "", key="store_id").strip()
        sales_target = st.number_input(
            "Daily sales target",
            min_value=0.0,
            value=float(CONFIG.alerts.sales_target),
            step=100.0,
            key="sales_target",
        )

        st.divider()
        rules = get_alert_rules()
        updated = render_rule_settings(rules)
        if updated is not rules:
            set_alert_rules(updated)

        with st.expander("Query timings", expanded=False):
            timings = global_metrics.summary_frame()
            if timings.empty:
                st.caption("No queries yet.")
            else:
                st.dataframe(timings.round(3), use_container_width=True, hide_index=True)

    return store_id, float(sales_target)


# ============================================================
# 자동 갱신 구간 (fragment)
# ============================================================

@st.fragment(run_every=CONFIG.refresh.metrics_interval_seconds)
def _metrics_section(client: Any, store_id: str, sales_target: float) -> None:
    with handle_domain_errors():
        result = ensure_snapshot(client, store_id, sales_target=sales_target)
        render_business_metrics(result.metrics)
        if result.refreshed_at is not None:
            st.caption(f"Last updated {result.refreshed_at:%H:%M:%S}")


@st.fragment(run_every=CONFIG.refresh.alerts_interval_seconds)
def _alerts_section(client: Any, store_id: str, sales_target: float) -> None:
    with handle_domain_errors():
        result = ensure_snapshot(client, store_id, sales_target=sales_target)
        board = get_alert_board()
        board.replace(
            generate_business_alerts(
                result.metrics,
                now=local_now(CONFIG.timezone),
                rules=get_alert_rules(),
            )
        )
        render_alert_panel(board)


@st.fragment(run_every=CONFIG.refresh.metrics_interval_seconds)
def _widgets_section(client: Any, store_id: str, sales_target: float) -> None:
    now = local_now(CONFIG.timezone)
    refresh = CONFIG.refresh
    with handle_domain_errors():
        metrics = ensure_snapshot(client, store_id, sales_target=sales_target).metrics
        recent_orders = fetch_recent_orders(client, store_id, limit=refresh.recent_orders_limit)
        expenses = fetch_expense_summary(
            client,
            store_id,
            now=now,
            recent=refresh.recent_items,
            top=refresh.top_categories,
            tz=CONFIG.timezone,
        )
        laybys = fetch_layby_summary(client, store_id, now=now, recent=refresh.recent_items)
        transactions = fetch_transaction_summary(client, store_id, now=now, tz=CONFIG.timezone)

        render_widgets(
            [
                sales_widget(metrics, recent_orders),
                inventory_widget(metrics),
                customers_widget(metrics),
                expenses_widget(expenses),
                layby_widget(laybys),
                transactions_widget(transactions),
            ]
        )


# ============================================================
# 탭
# ============================================================

def _render_overview(client: Any, store_id: str) -> None:
    now = local_now(CONFIG.timezone)
    with handle_domain_errors():
        rows = load_dashboard_rows(client, store_id, today_key(), CONFIG.timezone)

        inject_responsive_styles()
        health = financial_health(rows.transactions, rows.expenses)
        st.markdown(
            build_grid(
                financial_health_cards(health, retail_stock_value=inventory_retail_value(rows.products)),
                extra_class="kpi-grid--summary",
            ),
            unsafe_allow_html=True,
        )

        chart_col, products_col = st.columns([2, 1])
        with measure_time_context("overview charts"):
            with chart_col:
                st.subheader("Sales vs Expenses")
                render_sales_expenses_chart(rows.transactions, rows.expenses, now=pd.Timestamp(now))
            with products_col:
                st.subheader("Top Selling Products")
                render_top_products(rows.transactions, rows.products)


def _render_records(client: Any, store_id: str) -> None:
    now = local_now(CONFIG.timezone)
    with handle_domain_errors():
        rows = load_dashboard_rows(client, store_id, today_key(), CONFIG.timezone)
        layby_tab, expense_tab, inventory_tab, customer_tab = st.tabs(
            ["Laybys", "Expenses", "Inventory", "Customers"]
        )
        with layby_tab:
            render_layby_records(load_store("laybys", LaybyStore, rows.laybys, now=now))
        with expense_tab:
            render_expense_records(load_store("expenses", ExpenseStore, rows.expenses, now=now))
        with inventory_tab:
            render_inventory_records(load_store("inventory", InventoryStore, rows.products))
        with customer_tab:
            customers = load_customers(client, store_id, today_key())
            render_customer_records(load_store("customers", CustomerStore, customers))


def main() -> None:
    st.set_page_config(page_title="POS Dashboard", page_icon="🏪", layout="wide")
    st.title("🏪 POS Dashboard")

    settings = _load_settings()
    if settings is None:
        st.stop()

    store_id, sales_target = _render_sidebar(settings)
    if not store_id:
        st.info("Enter a store ID in the sidebar to load the dashboard.")
        st.stop()

    client = None
    with handle_domain_errors():
        client = get_client(settings)
    if client is None:
        st.stop()

    overview_tab, metrics_tab, alerts_tab, widgets_tab, records_tab = st.tabs(
        ["📊 Overview", "📈 Business Intelligence", "🔔 Alerts", "🧩 Widgets", "🗂️ Records"]
    )
    with overview_tab:
        _render_overview(client, store_id)
    with metrics_tab:
        _metrics_section(client, store_id, sales_target)
    with alerts_tab:
        _alerts_section(client, store_id, sales_target)
    with widgets_tab:
        _widgets_section(client, store_id, sales_target)
    with records_tab:
        _render_records(client, store_id)


if __name__ == "__main__":
    main()
