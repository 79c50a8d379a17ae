"""
Supabase 조회 함수 (fetcher)

각 fetcher는 클라이언트, 매장 ID, 기준 시각을 받아 Supabase를 조회하고
analytics 계층의 집계 함수로 요약 모델을 만듭니다.

- 매출/재고/고객/운영 fetcher는 지표 스냅샷(BusinessMetrics)의 재료
- 레이바이/지출/거래/대시보드 행 fetcher는 위젯과 개요 화면의 재료
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from pos_dashboard.analytics import (
    attach_last_order_date,
    summarize_customers,
    summarize_expenses,
    summarize_inventory,
    summarize_laybys,
    summarize_operations,
    summarize_sales,
    summarize_transactions,
)
from pos_dashboard.common.data_utils import nested_value
from pos_dashboard.common.performance import measure_time
from pos_dashboard.domain.dates import date_string, day_window, month_prefix, to_query_iso
from pos_dashboard.domain.models import (
    CustomerSummary,
    ExpenseSummary,
    InventorySummary,
    LaybySummary,
    OperationsSummary,
    SalesSummary,
    TransactionSummary,
)
from pos_dashboard.domain.validation import ensure_columns

from .client import run_query

logger = logging.getLogger(__name__)

# 지출 날짜 컬럼 (YYYY-MM-DD)
EXPENSE_DATE_COLUMN = "expense_date"

# 진행 중으로 보는 레이바이 상태
OPEN_LAYBY_STATUSES = ["active", "partial"]

PRODUCT_COLUMNS = "id, name, stock_quantity, low_stock_threshold, price, cost"


# ============================================================
# 지표 스냅샷 fetcher
# ============================================================

@measure_time
def fetch_sales_intelligence(
    client: Any,
    store_id: str,
    *,
    sales_target: float,
    now: pd.Timestamp,
    tz: str = "UTC",
) -> SalesSummary:
    """
    오늘/어제 완료 주문으로 매출 요약을 계산합니다.

    Raises:
        DataLoadError: 조회 실패
        ValidationError: total 컬럼 누락
    """
    today_gte, today_lte = day_window(now).iso_bounds(tz)
    yesterday_gte, yesterday_lte = day_window(now, days_ago=1).iso_bounds(tz)

    todays = run_query(
        client.table("orders")
        .select("total, created_at")
        .eq("store_id", store_id)
        .eq("status", "completed")
        .gte("created_at", today_gte)
        .lte("created_at", today_lte),
        "orders",
    )
    yesterdays = run_query(
        client.table("orders")
        .select("total")
        .eq("store_id", store_id)
        .eq("status", "completed")
        .gte("created_at", yesterday_gte)
        .lte("created_at", yesterday_lte),
        "orders",
    )

    summary = summarize_sales(
        ensure_columns(todays, ["total"], optional=["created_at"], table="orders"),
        ensure_columns(yesterdays, ["total"], table="orders"),
        sales_target=sales_target,
    )
    logger.info(
        f"Sales: today {summary.todays_sales:.2f} ({summary.orders_today} orders), "
        f"progress {summary.sales_target_progress:.1f}%"
    )
    return summary


@measure_time
def fetch_inventory_intelligence(
    client: Any,
    store_id: str,
    *,
    todays_sales: float,
    slow_moving_multiplier: int = 3,
) -> InventorySummary:
    """활성 상품으로 재고 요약을 계산합니다. 회전율에 오늘 매출이 필요합니다."""
    rows = run_query(
        client.table("products")
        .select(PRODUCT_COLUMNS)
        .eq("store_id", store_id)
        .eq("is_active", True),
        "products",
    )
    products = ensure_columns(
        rows,
        ["stock_quantity", "low_stock_threshold"],
        optional=["id", "name", "price", "cost"],
        table="products",
    )
    summary = summarize_inventory(
        products,
        todays_sales=todays_sales,
        slow_moving_multiplier=slow_moving_multiplier,
    )
    logger.info(
        f"Inventory: {summary.total_products} products, "
        f"{summary.low_stock_items} low, {summary.out_of_stock_items} out"
    )
    return summary


@measure_time
def fetch_customer_intelligence(
    client: Any,
    store_id: str,
    *,
    now: pd.Timestamp,
    vip_spend: float = 500.0,
    churn_days: int = 30,
    tz: str = "UTC",
) -> CustomerSummary:
    """
    고객 목록과 주문 이력으로 고객 요약을 계산합니다.

    마지막 주문 시각은 매장 주문 한 번의 조회로 고객별 최댓값을 구합니다.
    """
    rows = run_query(
        client.table("customers")
        .select("id, name, status, total_spent, total_orders, created_at")
        .eq("store_id", store_id),
        "customers",
    )
    customers = ensure_columns(
        rows,
        ["status", "total_spent"],
        optional=["id", "name", "total_orders", "created_at"],
        table="customers",
    )
    if customers.empty:
        return CustomerSummary()

    order_rows = run_query(
        client.table("orders")
        .select("customer_id, created_at")
        .eq("store_id", store_id)
        .order("created_at", desc=True),
        "orders",
    )
    orders = ensure_columns(order_rows, ["customer_id", "created_at"], table="orders")

    summary = summarize_customers(
        attach_last_order_date(customers, orders),
        now=now,
        vip_spend=vip_spend,
        churn_days=churn_days,
        tz=tz,
    )
    logger.info(
        f"Customers: {summary.total_customers} total, {summary.new_customers_today} new today"
    )
    return summary


@measure_time
def fetch_operational_intelligence(
    client: Any,
    store_id: str,
    *,
    now: pd.Timestamp,
    tz: str = "UTC",
) -> OperationsSummary:
    """오늘 주문(상태 무관)으로 처리 현황과 손익을 계산합니다."""
    today_gte = to_query_iso(day_window(now).start, tz)
    rows = run_query(
        client.table("orders")
        .select("status, total, subtotal, discount_amount")
        .eq("store_id", store_id)
        .gte("created_at", today_gte),
        "orders",
    )
    orders = ensure_columns(
        rows, ["status", "total"], optional=["subtotal", "discount_amount"], table="orders"
    )
    summary = summarize_operations(orders)
    logger.info(
        f"Operations: {summary.orders_total} orders, refund rate {summary.refund_rate:.1f}%"
    )
    return summary


# ============================================================
# 위젯/개요 fetcher
# ============================================================

RECENT_ORDER_COLUMNS = ["id", "order_number", "total", "created_at", "customer"]


@measure_time
def fetch_recent_orders(client: Any, store_id: str, *, limit: int = 5) -> pd.DataFrame:
    """최근 주문을 고객명과 함께 최신순으로 반환합니다."""
    rows = run_query(
        client.table("orders")
        .select("id, order_number, total, created_at, customers (name)")
        .eq("store_id", store_id)
        .order("created_at", desc=True)
        .limit(limit),
        "orders",
    )
    orders = ensure_columns(
        rows,
        ["total", "created_at"],
        optional=["id", "order_number", "customers"],
        table="orders",
    )
    if orders.empty:
        return pd.DataFrame(columns=RECENT_ORDER_COLUMNS)

    orders["customer"] = nested_value(orders["customers"], "name", default="Walk-in Customer")
    orders["total"] = pd.to_numeric(orders["total"], errors="coerce").fillna(0.0)
    return orders[RECENT_ORDER_COLUMNS].head(limit).reset_index(drop=True)


@measure_time
def fetch_layby_summary(
    client: Any,
    store_id: str,
    *,
    now: pd.Timestamp,
    recent: int = 3,
) -> LaybySummary:
    """진행 중(active/partial) 레이바이 요약."""
    rows = run_query(
        client.table("layby_orders")
        .select("id, total_amount, balance_remaining, due_date, status, customers (name)")
        .eq("store_id", store_id)
        .in_("status", OPEN_LAYBY_STATUSES)
        .order("created_at", desc=True),
        "layby_orders",
    )
    laybys = ensure_columns(
        rows,
        ["balance_remaining", "status"],
        optional=["id", "total_amount", "due_date", "customers"],
        table="layby_orders",
    )
    return summarize_laybys(laybys, now=now, recent=recent)


@measure_time
def fetch_expense_summary(
    client: Any,
    store_id: str,
    *,
    now: pd.Timestamp,
    recent: int = 3,
    top: int = 3,
    tz: str = "UTC",
) -> ExpenseSummary:
    """오늘/이번 달/지난달 지출 요약."""
    columns = f"id, description, amount, category, {EXPENSE_DATE_COLUMN}, created_at"
    required = ["amount"]
    optional = ["id", "description", "category", EXPENSE_DATE_COLUMN, "created_at"]

    todays = run_query(
        client.table("expenses")
        .select(columns)
        .eq("store_id", store_id)
        .eq(EXPENSE_DATE_COLUMN, date_string(now))
        .order("created_at", desc=True),
        "expenses",
    )
    this_month = run_query(
        client.table("expenses")
        .select(columns)
        .eq("store_id", store_id)
        .like(EXPENSE_DATE_COLUMN, f"{month_prefix(now)}%")
        .order("created_at", desc=True),
        "expenses",
    )
    last_month = run_query(
        client.table("expenses")
        .select("amount")
        .eq("store_id", store_id)
        .like(EXPENSE_DATE_COLUMN, f"{month_prefix(now, months_back=1)}%"),
        "expenses",
    )

    return summarize_expenses(
        ensure_columns(todays, required, optional=optional, table="expenses"),
        ensure_columns(this_month, required, optional=optional, table="expenses"),
        ensure_columns(last_month, required, table="expenses"),
        now=now,
        recent=recent,
        top=top,
        tz=tz,
    )


@measure_time
def fetch_transaction_summary(
    client: Any,
    store_id: str,
    *,
    now: pd.Timestamp,
    recent: int = 4,
    tz: str = "UTC",
) -> TransactionSummary:
    """오늘 거래의 상태별 건수와 최근 거래 (품목 수 포함)."""
    rows = run_query(
        client.table("transactions")
        .select(
            "id, reference, total_amount, status, created_at, "
            "customers (name), transaction_items (quantity)"
        )
        .eq("store_id", store_id)
        .gte("created_at", to_query_iso(day_window(now).start, tz))
        .order("created_at", desc=True),
        "transactions",
    )
    transactions = ensure_columns(
        rows,
        ["status", "created_at"],
        optional=["id", "reference", "total_amount", "customers", "transaction_items"],
        table="transactions",
    )
    return summarize_transactions(transactions, now=now, recent=recent, tz=tz)


@dataclass(frozen=True)
class DashboardRows:
    """개요 화면(매출/지출 차트, 인기 상품, 손익 카드)과 기록 탭에 쓰는 원본 행"""

    transactions: pd.DataFrame = field(default_factory=pd.DataFrame)
    expenses: pd.DataFrame = field(default_factory=pd.DataFrame)
    products: pd.DataFrame = field(default_factory=pd.DataFrame)
    laybys: pd.DataFrame = field(default_factory=pd.DataFrame)


@measure_time
def fetch_dashboard_rows(
    client: Any,
    store_id: str,
    *,
    now: pd.Timestamp,
    months: int = 6,
    tz: str = "UTC",
) -> DashboardRows:
    """
    개요 화면과 기록 탭용 거래/지출/상품/레이바이 행을 조회합니다.

    월별 차트를 그릴 수 있도록 최근 months개월 치 거래와 지출을 가져옵니다.
    """
    since = pd.Timestamp(now).to_period("M").to_timestamp() - pd.DateOffset(months=months - 1)

    transactions = run_query(
        client.table("transactions")
        .select("*")
        .eq("store_id", store_id)
        .gte("created_at", to_query_iso(since, tz))
        .order("created_at", desc=True),
        "transactions",
    )
    expenses = run_query(
        client.table("expenses")
        .select("*")
        .eq("store_id", store_id)
        .gte(EXPENSE_DATE_COLUMN, date_string(since)),
        "expenses",
    )
    products = run_query(
        client.table("products")
        .select("*, categories (name)")
        .eq("store_id", store_id)
        .eq("is_active", True),
        "products",
    )
    # 레이바이 기록 탭에서 완료/취소 건도 보여 주므로 상태 필터 없이 조회
    laybys = run_query(
        client.table("layby_orders")
        .select("*, customers (name, phone)")
        .eq("store_id", store_id)
        .order("created_at", desc=True),
        "layby_orders",
    )

    return DashboardRows(
        transactions=ensure_columns(transactions, ["created_at"], table="transactions"),
        expenses=ensure_columns(expenses, ["amount"], table="expenses"),
        products=ensure_columns(products, [], optional=["name"], table="products"),
        laybys=ensure_columns(laybys, [], optional=["balance_remaining"], table="layby_orders"),
    )


@measure_time
def fetch_customers(client: Any, store_id: str) -> pd.DataFrame:
    """고객 기록 탭용 고객 목록 (마지막 주문일 포함)."""
    customers = ensure_columns(
        run_query(
            client.table("customers")
            .select("*")
            .eq("store_id", store_id)
            .order("name"),
            "customers",
        ),
        ["name"],
        optional=["id", "email", "phone", "status", "total_spent", "total_orders", "created_at"],
        table="customers",
    )
    if customers.empty:
        return customers

    orders = ensure_columns(
        run_query(
            client.table("orders")
            .select("customer_id, created_at")
            .eq("store_id", store_id),
            "orders",
        ),
        ["customer_id", "created_at"],
        table="orders",
    )
    return attach_last_order_date(customers, orders)
