"""
지표 스냅샷 새로 고침 테스트
"""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

from pos_dashboard.data_sources.refresh import metric_updates, refresh_snapshot
from pos_dashboard.domain.models import BusinessMetrics, LaybySummary, OperationsSummary

STORE = "store-1"


@pytest.fixture
def tables():
    return {
        "orders": [
            {"store_id": STORE, "customer_id": "c1", "total": 300.0, "status": "completed", "created_at": "2024-03-10T10:00:00+00:00"},
            {"store_id": STORE, "customer_id": "c1", "total": 100.0, "status": "refunded", "created_at": "2024-03-10T11:00:00+00:00"},
            {"store_id": STORE, "customer_id": "c1", "total": 200.0, "status": "completed", "created_at": "2024-03-09T10:00:00+00:00"},
        ],
        "products": [
            {"store_id": STORE, "is_active": True, "name": "Tea", "stock_quantity": 0, "low_stock_threshold": 5, "cost": 1.0},
            {"store_id": STORE, "is_active": True, "name": "Milk", "stock_quantity": 10, "low_stock_threshold": 5, "cost": 3.0},
        ],
        "customers": [
            {"store_id": STORE, "id": "c1", "name": "Ann", "status": "active", "total_spent": 100.0, "created_at": "2024-03-10T09:00:00+00:00"},
        ],
        "layby_orders": [
            {"store_id": STORE, "id": "l1", "status": "active", "balance_remaining": 75.0, "due_date": "2024-03-01", "created_at": "2024-02-01"},
        ],
    }


def test_metric_updates_maps_derived_fields():
    ops = metric_updates(OperationsSummary(net_profit=42.0, gross_revenue=50.0))
    laybys = metric_updates(LaybySummary(active_laybys=2, layby_value=120.0))

    assert ops["cash_flow"] == 42.0
    assert ops["gross_revenue"] == 50.0
    assert "total_discounts" not in ops
    assert laybys["outstanding_payments"] == 120.0
    assert laybys["active_laybys"] == 2
    assert "recent_laybys" not in laybys


def test_refresh_snapshot_combines_all_fetchers(fake_supabase, tables, now):
    client = fake_supabase(tables)

    result = refresh_snapshot(client, STORE, now=now, sales_target=600.0)
    m = result.metrics

    assert result.ok
    assert result.refreshed_at == now
    assert m.todays_sales == 300.0
    assert m.sales_target == 600.0
    assert m.sales_target_progress == 50.0
    assert m.out_of_stock_items == 1
    # 회전율은 오늘 매출로 계산
    assert m.inventory_turnover == pytest.approx(300.0 * 365 / 30.0)
    assert m.new_customers_today == 1
    assert m.orders_total == 2
    assert m.refund_rate == 50.0
    assert m.cash_flow == m.net_profit == 400.0
    assert m.overdue_laybys == 1
    assert m.outstanding_payments == 75.0


def test_refresh_runs_sales_first(fake_supabase, tables, now):
    client = fake_supabase(tables)

    refresh_snapshot(client, STORE, now=now)

    first, second = client.calls[0], client.calls[1]
    assert first.table == second.table == "orders"
    assert ("eq", "status", "completed") in first.filters


def test_failed_fetcher_keeps_previous_values(fake_supabase, tables, now):
    previous = BusinessMetrics(low_stock_items=7, out_of_stock_items=3, sales_target=800.0)
    client = fake_supabase(tables, failing={"products"})

    result = refresh_snapshot(client, STORE, previous=previous, now=now)

    assert not result.ok
    assert set(result.errors) == {"inventory"}
    assert result.metrics.low_stock_items == 7
    assert result.metrics.out_of_stock_items == 3
    # 목표를 넘기지 않으면 이전 스냅샷의 목표 사용
    assert result.metrics.sales_target == 800.0
    assert result.metrics.todays_sales == 300.0


def test_first_refresh_failure_defaults_to_zero(fake_supabase, now):
    client = fake_supabase(failing={"orders", "products", "customers", "layby_orders"})

    result = refresh_snapshot(client, STORE, now=now)

    assert set(result.errors) == {"sales", "inventory", "customers", "operations", "laybys"}
    assert result.metrics.todays_sales == 0.0
    assert result.metrics.total_products == 0
    assert result.metrics.sales_target == 1000.0


# ============================================================
# 세션 스냅샷
# ============================================================

def _session_patches(state):
    session_st = MagicMock()
    session_st.session_state = state
    return (
        patch("pos_dashboard.data_sources.session.st", session_st),
        patch("pos_dashboard.ui.adapters.st"),
    )


def test_ensure_snapshot_reuses_fresh_result(fake_supabase, tables, now):
    from pos_dashboard.data_sources.session import ensure_snapshot

    state = {}
    client = fake_supabase(tables)
    session_patch, adapter_patch = _session_patches(state)

    with session_patch, adapter_patch:
        first = ensure_snapshot(client, STORE, now=now)
        calls = len(client.calls)
        second = ensure_snapshot(client, STORE, now=now + pd.Timedelta(minutes=1))

    assert second is first
    assert len(client.calls) == calls


def test_ensure_snapshot_refreshes_when_stale_or_triggered(fake_supabase, tables, now):
    from pos_dashboard.data_sources.session import REFRESH_TRIGGER_KEY, ensure_snapshot

    state = {}
    client = fake_supabase(tables)
    session_patch, adapter_patch = _session_patches(state)

    with session_patch, adapter_patch:
        first = ensure_snapshot(client, STORE, now=now)
        stale = ensure_snapshot(client, STORE, now=now + pd.Timedelta(minutes=5))
        state[REFRESH_TRIGGER_KEY] = True
        triggered = ensure_snapshot(client, STORE, now=now + pd.Timedelta(minutes=6))

    assert stale is not first
    assert triggered is not stale
    assert state[REFRESH_TRIGGER_KEY] is False


def test_ensure_snapshot_notifies_failures(fake_supabase, tables, now):
    from pos_dashboard.data_sources.session import ensure_snapshot

    client = fake_supabase(tables, failing={"layby_orders"})
    session_patch, adapter_patch = _session_patches({})

    with session_patch, adapter_patch as mock_st:
        result = ensure_snapshot(client, STORE, now=now)

    assert set(result.errors) == {"laybys"}
    mock_st.toast.assert_called_once_with("Failed to load layby data", icon="⚠️")
