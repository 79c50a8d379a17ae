"""
데이터 소스 계층

Supabase 조회(fetcher), 새로 고침 주기, 세션 상태 관리를 제공합니다.
"""

from .client import get_supabase_client, run_query
from .fetchers import (
    DashboardRows,
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
from .refresh import RefreshResult, metric_updates, refresh_snapshot
from .session import (
    ensure_snapshot,
    get_client,
    load_customers,
    load_dashboard_rows,
    request_refresh,
    today_key,
)

__all__ = [
    # 클라이언트
    "get_supabase_client",
    "get_client",
    "run_query",
    # fetcher
    "DashboardRows",
    "fetch_sales_intelligence",
    "fetch_inventory_intelligence",
    "fetch_customer_intelligence",
    "fetch_customers",
    "fetch_operational_intelligence",
    "fetch_recent_orders",
    "fetch_layby_summary",
    "fetch_expense_summary",
    "fetch_transaction_summary",
    "fetch_dashboard_rows",
    # 새로 고침
    "RefreshResult",
    "metric_updates",
    "refresh_snapshot",
    # 세션
    "ensure_snapshot",
    "load_customers",
    "load_dashboard_rows",
    "request_refresh",
    "today_key",
]
