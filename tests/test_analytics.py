"""
집계 함수 테스트

매출/재고/고객/운영/지출/레이바이/거래 요약과 차트 시계열을 검증합니다.
"""
from __future__ import annotations

import pandas as pd
import pytest

from pos_dashboard.analytics import (
    attach_last_order_date,
    calculate_change,
    financial_health,
    inventory_retail_value,
    percent_change,
    relative_time,
    sales_expenses_series,
    stock_levels,
    summarize_customers,
    summarize_expenses,
    summarize_inventory,
    summarize_laybys,
    summarize_operations,
    summarize_sales,
    summarize_transactions,
    top_selling_products,
)


# ============================================================
# 매출
# ============================================================

def test_percent_change_and_calculate_change():
    assert percent_change(150.0, 100.0) == 50.0
    assert percent_change(10.0, 0.0) == 0.0
    assert calculate_change(5.0, 0.0) == 100.0
    assert calculate_change(0.0, 0.0) == 0.0
    assert calculate_change(50.0, 100.0) == -50.0


def test_summarize_sales_basic():
    todays = pd.DataFrame({"total": [100.0, 200.0, 300.0]})
    yesterdays = pd.DataFrame({"total": [400.0]})

    summary = summarize_sales(todays, yesterdays, sales_target=1000.0)

    assert summary.todays_sales == 600.0
    assert summary.orders_today == 3
    assert summary.average_order_value == 200.0
    assert summary.sales_velocity == 50.0
    assert summary.sales_target_progress == 60.0


def test_summarize_sales_no_orders_and_zero_target():
    empty = pd.DataFrame(columns=["total"])

    summary = summarize_sales(empty, empty, sales_target=0.0)

    assert summary.todays_sales == 0.0
    assert summary.average_order_value == 0.0
    assert summary.sales_velocity == 0.0
    assert summary.sales_target_progress == 0.0


def test_sales_expenses_series_daily(now):
    transactions = pd.DataFrame(
        {
            "created_at": [
                "2024-03-10T09:00:00+00:00",
                "2024-03-10T12:00:00+00:00",
                "2024-03-08T10:00:00+00:00",
                "2024-02-01T10:00:00+00:00",  # 범위 밖
            ],
            "total_amount": [100.0, 50.0, 30.0, 999.0],
        }
    )
    expenses = pd.DataFrame({"expense_date": ["2024-03-10", "2024-03-04"], "amount": [40.0, 10.0]})

    series = sales_expenses_series(transactions, expenses, period="daily", now=now, days=7)

    assert list(series.columns) == ["period", "period_start", "sales", "expenses", "profit", "orders"]
    assert len(series) == 7
    assert series["period_start"].iloc[0] == pd.Timestamp("2024-03-04")
    assert series["period_start"].iloc[-1] == pd.Timestamp("2024-03-10")
    assert series["period"].iloc[-1] == "Sun"

    last = series.iloc[-1]
    assert last["sales"] == 150.0
    assert last["expenses"] == 40.0
    assert last["profit"] == 110.0
    assert last["orders"] == 2
    assert series["sales"].sum() == 180.0
    assert series["expenses"].sum() == 50.0


def test_sales_expenses_series_weekly_starts_on_sunday(now):
    series = sales_expenses_series(pd.DataFrame(), pd.DataFrame(), period="weekly", now=now)

    assert len(series) == 8
    assert all(ts.dayofweek == 6 for ts in series["period_start"])
    assert series["period_start"].iloc[-1] == pd.Timestamp("2024-03-10")
    assert series["sales"].sum() == 0.0


def test_sales_expenses_series_monthly(now):
    transactions = pd.DataFrame(
        {"created_at": ["2024-01-20T10:00:00+00:00", "2023-09-15T10:00:00+00:00"], "total": [70.0, 5.0]}
    )

    series = sales_expenses_series(transactions, pd.DataFrame(), period="monthly", now=now)

    assert len(series) == 6
    assert series["period"].tolist()[0] == "Oct 2023"
    assert series["period"].tolist()[-1] == "Mar 2024"
    assert series.loc[series["period"] == "Jan 2024", "sales"].item() == 70.0
    # 6개월 범위 밖의 2023-09 거래는 제외
    assert series["sales"].sum() == 70.0


def test_top_selling_products_counts_items():
    transactions = pd.DataFrame(
        {
            "items": [
                [{"name": "Coffee", "quantity": 2}, {"product_name": "Bagel", "quantity": 1}],
                [{"name": "Coffee", "quantity": 3}],
                None,
            ],
            "product_name": [None, None, "Muffin"],
        }
    )

    top = top_selling_products(transactions, pd.DataFrame(), limit=2)

    assert top.to_dict("records") == [
        {"name": "Coffee", "orders": 5},
        {"name": "Bagel", "orders": 1},
    ]


def test_top_selling_products_falls_back_to_inventory_then_placeholder():
    inventory = pd.DataFrame({"name": ["Tea", "Cake"]})

    from_inventory = top_selling_products(pd.DataFrame(), inventory)
    placeholder = top_selling_products(pd.DataFrame(), pd.DataFrame())

    assert from_inventory["name"].tolist() == ["Tea", "Cake"]
    assert from_inventory["orders"].tolist() == [0, 0]
    assert placeholder.to_dict("records") == [{"name": "No products yet", "orders": 0}]


def test_top_selling_products_uses_description_fallback():
    transactions = pd.DataFrame({"description": ["Gift card", None]})

    top = top_selling_products(transactions, pd.DataFrame())

    assert dict(zip(top["name"], top["orders"])) == {"Gift card": 1, "Sale Item": 1}


# ============================================================
# 재고
# ============================================================

def _products():
    return pd.DataFrame(
        {
            "name": ["Coffee", "Tea", "Cake", "Juice"],
            "stock_quantity": [0, 3, 5, 40],
            "low_stock_threshold": [5, 5, 5, 5],
            "cost": [2.0, 1.0, 3.0, 0.5],
            "price": [4.0, 2.0, 6.0, 1.0],
        }
    )


def test_stock_levels_boundaries():
    levels = stock_levels(_products())["stock_level"].tolist()

    # 재고 0은 품절, 재고 == 기준값은 저재고
    assert levels == ["out", "low", "low", "in"]


def test_summarize_inventory():
    summary = summarize_inventory(_products(), todays_sales=100.0)

    assert summary.total_products == 4
    assert summary.out_of_stock_items == 1
    assert summary.low_stock_items == 2
    assert summary.slow_moving_items == 1  # 40 > 5 × 3
    assert summary.inventory_value == 3.0 + 15.0 + 20.0
    assert summary.inventory_turnover == pytest.approx(100.0 * 365 / 38.0)
    assert summary.low_stock_names == ("Tea (3 left)", "Cake (5 left)")
    assert summary.out_of_stock_names == ("Coffee",)

    # 재고 == 기준값 × 3은 저회전이 아님 (초과만)
    edge = pd.DataFrame({"stock_quantity": [15, 16], "low_stock_threshold": [5, 5], "cost": [1.0, 1.0]})
    assert summarize_inventory(edge).slow_moving_items == 1


def test_summarize_inventory_zero_value_has_zero_turnover():
    products = pd.DataFrame({"stock_quantity": [0], "low_stock_threshold": [2], "cost": [1.0]})

    assert summarize_inventory(products, todays_sales=500.0).inventory_turnover == 0.0


def test_inventory_retail_value():
    assert inventory_retail_value(_products()) == 0 + 6.0 + 30.0 + 40.0


# ============================================================
# 고객
# ============================================================

def test_attach_last_order_date():
    customers = pd.DataFrame({"id": ["c1", "c2"], "name": ["Ann", "Bob"]})
    orders = pd.DataFrame(
        {
            "customer_id": ["c1", "c1", None],
            "created_at": ["2024-03-01T10:00:00+00:00", "2024-03-05T10:00:00+00:00", "2024-03-06T10:00:00+00:00"],
        }
    )

    result = attach_last_order_date(customers, orders)

    assert result.loc[0, "last_order_date"].startswith("2024-03-05T10:00:00")
    assert result.loc[1, "last_order_date"] is None


def test_summarize_customers(now):
    customers = pd.DataFrame(
        {
            "name": ["Ann", "Bob", "Cid", "Dee"],
            "status": ["active", "vip", "active", "inactive"],
            "total_spent": [600.0, 900.0, 100.0, 0.0],
            "created_at": ["2024-03-10T08:00:00+00:00", "2023-01-01", "2024-03-09T23:00:00+00:00", None],
            "last_order_date": ["2024-01-15T10:00:00+00:00", "2024-03-09T10:00:00+00:00", None, None],
        }
    )

    summary = summarize_customers(customers, now=now, vip_spend=500.0, churn_days=30)

    assert summary.total_customers == 4
    assert summary.new_customers_today == 1
    assert summary.vip_customers == 1
    assert summary.active_customers == 2
    assert summary.customer_retention_rate == 50.0
    assert summary.average_customer_value == 400.0
    # Bob은 이미 VIP라 후보에서 제외
    assert summary.potential_vips == 1
    assert summary.potential_vip_names == ("Ann ($600.00)",)
    # 주문 이력이 없는 고객은 이탈 위험에서 제외
    assert summary.churn_risk_customers == 1

    # 경계값: 누적 구매액 == vip_spend, 마지막 주문이 정확히 churn_days일 전이면 제외
    edge = pd.DataFrame(
        {
            "name": ["Eve", "Fay"],
            "status": ["active", "active"],
            "total_spent": [500.0, 500.01],
            "last_order_date": ["2024-02-09T14:00:00+00:00", "2024-02-09T13:59:59+00:00"],
        }
    )
    edge_summary = summarize_customers(edge, now=now, vip_spend=500.0, churn_days=30)
    assert edge_summary.potential_vip_names == ("Fay ($500.01)",)
    assert edge_summary.churn_risk_customers == 1


def test_summarize_customers_empty(now):
    summary = summarize_customers(pd.DataFrame(), now=now)

    assert summary.total_customers == 0
    assert summary.average_customer_value == 0.0


# ============================================================
# 운영 / 손익
# ============================================================

def test_summarize_operations():
    orders = pd.DataFrame(
        {
            "status": ["completed", "completed", "pending", "refunded"],
            "total": [100.0, 200.0, 50.0, 50.0],
            "discount_amount": [10.0, 0.0, None, 0.0],
        }
    )

    summary = summarize_operations(orders)

    assert summary.orders_total == 4
    assert summary.orders_fulfilled == 2
    assert summary.pending_orders == 1
    assert summary.refunded_orders == 1
    assert summary.refund_rate == 25.0
    assert summary.gross_revenue == 400.0
    assert summary.net_profit == 390.0
    assert summary.profit_margin == pytest.approx(97.5)


def test_summarize_operations_no_orders():
    summary = summarize_operations(pd.DataFrame())

    assert summary.refund_rate == 0.0
    assert summary.profit_margin == 0.0


def test_financial_health():
    health = financial_health(pd.DataFrame({"total_amount": [300.0]}), pd.DataFrame({"amount": [120.0]}))

    assert health.profit == 180.0
    assert health.profit_margin == 60.0
    assert financial_health(pd.DataFrame(), pd.DataFrame({"amount": [5.0]})).profit_margin == 0.0


# ============================================================
# 지출
# ============================================================

def test_relative_time():
    base = pd.Timestamp("2024-03-10 12:00")

    assert relative_time(pd.Timestamp("2024-03-10 11:00"), base) == "1 hour ago"
    assert relative_time(pd.Timestamp("2024-03-10 09:00"), base) == "3 hours ago"
    assert relative_time(pd.Timestamp("2024-03-08 12:00"), base) == "2 days ago"
    assert relative_time(pd.Timestamp("2024-03-10 11:45"), base, minutes=True) == "15 min ago"
    assert relative_time(pd.NaT, base) == ""


def test_summarize_expenses(now):
    month = pd.DataFrame(
        {
            "id": [1, 2, 3, 4],
            "description": ["Rent", "Coffee beans", "Milk", "Cups"],
            "amount": [500.0, 120.0, 30.0, 50.0],
            "category": ["Rent", "Supplies", "Supplies", None],
            "created_at": [
                "2024-03-10T11:00:00+00:00",
                "2024-03-09T14:00:00+00:00",
                "2024-03-05T10:00:00+00:00",
                "2024-03-02T10:00:00+00:00",
            ],
        }
    )
    today = month.head(1)
    last_month = pd.DataFrame({"amount": [350.0]})

    summary = summarize_expenses(today, month, last_month, now=now, recent=2, top=2)

    assert summary.total_expenses == 500.0
    assert summary.monthly_expenses == 700.0
    assert summary.expense_growth == 100.0
    assert summary.recent_expenses["description"].tolist() == ["Rent", "Coffee beans"]
    assert summary.recent_expenses["when"].tolist() == ["3 hours ago", "1 day ago"]
    assert summary.top_categories["category"].tolist() == ["Rent", "Supplies"]
    assert summary.top_categories["percentage"].iloc[1] == pytest.approx(150.0 / 700.0 * 100)


def test_summarize_expenses_empty_month(now):
    empty = pd.DataFrame(columns=["amount"])

    summary = summarize_expenses(empty, empty, empty, now=now)

    assert summary.monthly_expenses == 0.0
    assert summary.expense_growth == 0.0
    assert summary.recent_expenses.empty
    assert list(summary.top_categories.columns) == ["category", "amount", "percentage"]


# ============================================================
# 레이바이 / 거래
# ============================================================

def test_summarize_laybys_marks_overdue(now):
    laybys = pd.DataFrame(
        {
            "id": ["l1", "l2", "l3"],
            "total_amount": [300.0, 200.0, 100.0],
            "balance_remaining": [150.0, 50.0, 0.0],
            "due_date": ["2024-03-01", "2024-03-10", "2024-02-01"],
            "status": ["active", "partial", "active"],
            "customers": [{"name": "Ann"}, [{"name": "Bob"}], None],
        }
    )

    summary = summarize_laybys(laybys, now=now, recent=3)

    assert summary.active_laybys == 3
    assert summary.layby_value == 200.0
    # 기한이 오늘인 건과 잔액 0인 건은 연체가 아님
    assert summary.overdue_laybys == 1
    assert summary.recent_laybys["status"].tolist() == ["overdue", "partial", "active"]
    assert summary.recent_laybys["customer"].tolist() == ["Ann", "Bob", "Unknown Customer"]


def test_summarize_transactions(now):
    transactions = pd.DataFrame(
        {
            "id": ["abcdef123", "zz9"],
            "reference": [None, "INV-7"],
            "total_amount": [40.0, 60.0],
            "status": ["completed", "Refunded"],
            "created_at": ["2024-03-10T13:45:00+00:00", "2024-03-10T11:00:00+00:00"],
            "customers": [None, {"name": "Ann"}],
            "transaction_items": [[{"quantity": 2}, {"quantity": 1}], []],
        }
    )

    summary = summarize_transactions(transactions, now=now)

    assert summary.total_transactions == 2
    assert summary.completed_transactions == 1
    assert summary.refunded_transactions == 1
    assert summary.total_amount == 100.0
    recent = summary.recent_transactions
    assert recent["reference"].tolist() == ["TRX-abcdef", "INV-7"]
    assert recent["customer"].tolist() == ["Walk-in Customer", "Ann"]
    assert recent["items"].tolist() == [3, 0]
    assert recent["when"].tolist() == ["15 min ago", "3 hours ago"]
