"""
Supabase fetcher 테스트

conftest.py의 FakeSupabase 쿼리 빌더로 조회 필터와 집계 결과를 검증합니다.
"""
from __future__ import annotations

import pytest

from pos_dashboard.data_sources.client import run_query
from pos_dashboard.data_sources.fetchers import (
    fetch_customer_intelligence,
    fetch_customers,
    fetch_dashboard_rows,
    fetch_expense_summary,
    fetch_inventory_intelligence,
    fetch_layby_summary,
    fetch_operational_intelligence,
    fetch_recent_orders,
    fetch_sales_intelligence,
    fetch_transaction_summary,
)
from pos_dashboard.domain.exceptions import DataLoadError, ValidationError

STORE = "store-1"


def _order(total, created_at, status="completed", store=STORE, **extra):
    return {"store_id": store, "total": total, "created_at": created_at, "status": status, **extra}


@pytest.fixture
def orders():
    return [
        _order(100.0, "2024-03-10T09:00:00+00:00"),
        _order(200.0, "2024-03-10T12:30:00+00:00", discount_amount=20.0),
        _order(80.0, "2024-03-10T13:00:00+00:00", status="refunded"),
        _order(50.0, "2024-03-10T13:30:00+00:00", status="pending"),
        _order(150.0, "2024-03-09T10:00:00+00:00"),
        _order(999.0, "2024-03-10T10:00:00+00:00", store="other-store"),
    ]


# ============================================================
# 클라이언트
# ============================================================

def test_run_query_wraps_failures(fake_supabase):
    client = fake_supabase(failing={"orders"})

    with pytest.raises(DataLoadError) as exc_info:
        run_query(client.table("orders").select("*"), "orders")

    assert exc_info.value.table == "orders"


# ============================================================
# 지표 스냅샷 fetcher
# ============================================================

def test_fetch_sales_intelligence(fake_supabase, orders, now):
    client = fake_supabase({"orders": orders})

    summary = fetch_sales_intelligence(client, STORE, sales_target=1000.0, now=now)

    assert summary.todays_sales == 300.0
    assert summary.yesterdays_sales == 150.0
    assert summary.orders_today == 2
    assert summary.average_order_value == 150.0
    assert summary.sales_velocity == 100.0
    assert summary.sales_target_progress == 30.0
    assert len(client.queried("orders")) == 2


def test_fetch_sales_intelligence_validates_rows(fake_supabase, now):
    client = fake_supabase({"orders": [{"store_id": STORE, "status": "completed", "created_at": "2024-03-10T09:00:00+00:00"}]})

    with pytest.raises(ValidationError):
        fetch_sales_intelligence(client, STORE, sales_target=1000.0, now=now)


def test_fetch_inventory_intelligence_only_active_products(fake_supabase):
    products = [
        {"store_id": STORE, "is_active": True, "name": "Coffee", "stock_quantity": 0, "low_stock_threshold": 5, "cost": 2.0},
        {"store_id": STORE, "is_active": True, "name": "Tea", "stock_quantity": 2, "low_stock_threshold": 5, "cost": 1.0},
        {"store_id": STORE, "is_active": False, "name": "Old", "stock_quantity": 0, "low_stock_threshold": 5, "cost": 1.0},
    ]
    client = fake_supabase({"products": products})

    summary = fetch_inventory_intelligence(client, STORE, todays_sales=73.0)

    assert summary.total_products == 2
    assert summary.out_of_stock_items == 1
    assert summary.low_stock_items == 1
    assert summary.inventory_value == 2.0
    assert summary.inventory_turnover == pytest.approx(73.0 * 365 / 2.0)


def test_fetch_customer_intelligence(fake_supabase, now):
    customers = [
        {"store_id": STORE, "id": "c1", "name": "Ann", "status": "active", "total_spent": 800.0, "created_at": "2024-03-10T08:00:00+00:00"},
        {"store_id": STORE, "id": "c2", "name": "Bob", "status": "inactive", "total_spent": 40.0, "created_at": "2023-05-01T08:00:00+00:00"},
    ]
    orders = [
        {"store_id": STORE, "customer_id": "c1", "created_at": "2024-03-09T10:00:00+00:00"},
        {"store_id": STORE, "customer_id": "c2", "created_at": "2023-12-01T10:00:00+00:00"},
    ]
    client = fake_supabase({"customers": customers, "orders": orders})

    summary = fetch_customer_intelligence(client, STORE, now=now)

    assert summary.total_customers == 2
    assert summary.new_customers_today == 1
    assert summary.potential_vips == 1
    assert summary.churn_risk_customers == 1
    assert summary.customer_retention_rate == 50.0


def test_fetch_customer_intelligence_skips_orders_without_customers(fake_supabase, now):
    client = fake_supabase({"customers": []})

    summary = fetch_customer_intelligence(client, STORE, now=now)

    assert summary.total_customers == 0
    assert client.queried("orders") == []


def test_fetch_operational_intelligence(fake_supabase, orders, now):
    client = fake_supabase({"orders": orders})

    summary = fetch_operational_intelligence(client, STORE, now=now)

    assert summary.orders_total == 4
    assert summary.orders_fulfilled == 2
    assert summary.pending_orders == 1
    assert summary.refunded_orders == 1
    assert summary.refund_rate == 25.0
    assert summary.gross_revenue == 430.0
    assert summary.net_profit == 410.0


# ============================================================
# 위젯/개요 fetcher
# ============================================================

def test_fetch_recent_orders_newest_first(fake_supabase, orders):
    rows = [dict(o, id=str(i), order_number=f"ORD-{i}") for i, o in enumerate(orders)]
    rows[1]["customers"] = {"name": "Ann"}
    client = fake_supabase({"orders": rows})

    recent = fetch_recent_orders(client, STORE, limit=2)

    assert recent["order_number"].tolist() == ["ORD-3", "ORD-2"]
    assert recent["customer"].tolist() == ["Walk-in Customer", "Walk-in Customer"]
    assert list(recent.columns) == ["id", "order_number", "total", "created_at", "customer"]


def test_fetch_recent_orders_empty(fake_supabase):
    recent = fetch_recent_orders(fake_supabase({"orders": []}), STORE)

    assert recent.empty
    assert "customer" in recent.columns


def test_fetch_layby_summary_only_open_laybys(fake_supabase, now):
    laybys = [
        {"store_id": STORE, "id": "l1", "status": "active", "balance_remaining": 100.0, "due_date": "2024-03-01", "created_at": "2024-02-01"},
        {"store_id": STORE, "id": "l2", "status": "partial", "balance_remaining": 40.0, "due_date": "2024-04-01", "created_at": "2024-02-10"},
        {"store_id": STORE, "id": "l3", "status": "completed", "balance_remaining": 0.0, "due_date": "2024-01-01", "created_at": "2024-01-01"},
    ]
    client = fake_supabase({"layby_orders": laybys})

    summary = fetch_layby_summary(client, STORE, now=now)

    assert summary.active_laybys == 2
    assert summary.layby_value == 140.0
    assert summary.overdue_laybys == 1
    assert summary.recent_laybys["id"].tolist() == ["l2", "l1"]


def test_fetch_expense_summary(fake_supabase, now):
    expenses = [
        {"store_id": STORE, "id": 1, "amount": 60.0, "category": "Supplies", "expense_date": "2024-03-10", "created_at": "2024-03-10T09:00:00+00:00"},
        {"store_id": STORE, "id": 2, "amount": 140.0, "category": "Rent", "expense_date": "2024-03-02", "created_at": "2024-03-02T09:00:00+00:00"},
        {"store_id": STORE, "id": 3, "amount": 100.0, "category": "Rent", "expense_date": "2024-02-15", "created_at": "2024-02-15T09:00:00+00:00"},
    ]
    client = fake_supabase({"expenses": expenses})

    summary = fetch_expense_summary(client, STORE, now=now)

    assert summary.total_expenses == 60.0
    assert summary.monthly_expenses == 200.0
    assert summary.last_month_expenses == 100.0
    assert summary.expense_growth == 100.0
    assert summary.recent_expenses["id"].tolist() == [1, 2]
    assert summary.top_categories["category"].tolist() == ["Rent", "Supplies"]


def test_fetch_transaction_summary(fake_supabase, now):
    transactions = [
        {"store_id": STORE, "id": "t1", "total_amount": 25.0, "status": "completed", "created_at": "2024-03-10T13:00:00+00:00", "transaction_items": [{"quantity": 2}]},
        {"store_id": STORE, "id": "t2", "total_amount": 75.0, "status": "pending", "created_at": "2024-03-10T10:00:00+00:00"},
        {"store_id": STORE, "id": "t0", "total_amount": 500.0, "status": "completed", "created_at": "2024-03-09T10:00:00+00:00"},
    ]
    client = fake_supabase({"transactions": transactions})

    summary = fetch_transaction_summary(client, STORE, now=now)

    assert summary.total_transactions == 2
    assert summary.pending_transactions == 1
    assert summary.total_amount == 100.0
    assert summary.recent_transactions["reference"].tolist() == ["TRX-t1", "TRX-t2"]


def test_fetch_dashboard_rows(fake_supabase, now):
    tables = {
        "transactions": [
            {"store_id": STORE, "total_amount": 10.0, "created_at": "2024-03-01T10:00:00+00:00"},
            {"store_id": STORE, "total_amount": 20.0, "created_at": "2023-09-30T10:00:00+00:00"},
        ],
        "expenses": [
            {"store_id": STORE, "amount": 5.0, "expense_date": "2023-10-01"},
            {"store_id": STORE, "amount": 7.0, "expense_date": "2023-09-01"},
        ],
        "products": [
            {"store_id": STORE, "is_active": True, "name": "Tea", "stock_quantity": 3},
        ],
        "layby_orders": [
            {"store_id": STORE, "status": "completed", "created_at": "2024-01-01"},
            {"store_id": STORE, "status": "active", "created_at": "2024-02-01"},
        ],
    }
    client = fake_supabase(tables)

    rows = fetch_dashboard_rows(client, STORE, now=now)

    # 최근 6개월(2023-10 ~ 2024-03)만 조회
    assert rows.transactions["total_amount"].tolist() == [10.0]
    assert rows.expenses["amount"].tolist() == [5.0]
    assert rows.products["name"].tolist() == ["Tea"]
    # 기록 탭용으로 모든 상태의 레이바이를 최신순으로 조회
    assert rows.laybys["status"].tolist() == ["active", "completed"]


def test_fetch_customers_attaches_last_order(fake_supabase):
    client = fake_supabase(
        {
            "customers": [
                {"store_id": STORE, "id": "c2", "name": "Bob"},
                {"store_id": STORE, "id": "c1", "name": "Ann"},
            ],
            "orders": [{"store_id": STORE, "customer_id": "c1", "created_at": "2024-03-01T10:00:00+00:00"}],
        }
    )

    customers = fetch_customers(client, STORE)

    assert customers["name"].tolist() == ["Ann", "Bob"]
    assert customers["last_order_date"].iloc[0].startswith("2024-03-01")
    assert customers["last_order_date"].iloc[1] is None
